import httpx

from cvchat.auth.base import BaseIdentityProvider
from cvchat.logging.logger import Log
from cvchat.processor.exceptions import AuthError


class SupabaseIdentityProvider(BaseIdentityProvider):
    """Validates access tokens against the Supabase Auth `/auth/v1/user` endpoint."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: int,
        client: httpx.Client | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("supabase_url is required for token validation")
        self._user_url = f"{base_url.rstrip('/')}/auth/v1/user"
        self._api_key = api_key
        self._client = client if client is not None else httpx.Client(timeout=timeout_seconds)

    def authenticate(self, token: str) -> str:
        if not token:
            raise AuthError("No token provided")
        try:
            response = self._client.get(
                self._user_url,
                headers={"Authorization": f"Bearer {token}", "apikey": self._api_key},
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            Log.error("Identity provider unreachable", error=str(exc))
            raise AuthError("Authentication failed") from exc
        except httpx.HTTPError as exc:
            raise AuthError("Authentication failed") from exc

        if response.status_code != 200:
            raise AuthError("Invalid or expired token")
        try:
            payload = response.json()
        except ValueError as exc:
            raise AuthError("Authentication failed") from exc
        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not user_id:
            raise AuthError("Invalid or expired token")
        return str(user_id)

    def close(self) -> None:
        self._client.close()
