import httpx
import pytest

from cvchat.auth.supabase_identity import SupabaseIdentityProvider
from cvchat.processor.exceptions import AuthError


def _provider(handler) -> SupabaseIdentityProvider:  # type: ignore[no-untyped-def]
    return SupabaseIdentityProvider(
        base_url="https://project.supabase.co/",
        api_key="anon-key",
        timeout_seconds=5,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


class TestAuthenticate:
    def test_returns_user_id_for_valid_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "user-1", "email": "jane@example.com"})

        assert _provider(handler).authenticate("good-token") == "user-1"
        assert str(seen[0].url) == "https://project.supabase.co/auth/v1/user"
        assert seen[0].headers["Authorization"] == "Bearer good-token"
        assert seen[0].headers["apikey"] == "anon-key"

    def test_rejects_empty_token_without_request(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        with pytest.raises(AuthError, match="No token provided"):
            _provider(handler).authenticate("")

    def test_rejects_invalid_token(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"msg": "invalid JWT"})

        with pytest.raises(AuthError, match="Invalid or expired token"):
            _provider(handler).authenticate("bad-token")

    def test_rejects_response_without_user_id(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        with pytest.raises(AuthError, match="Invalid or expired token"):
            _provider(handler).authenticate("token")

    def test_non_json_response_fails_authentication(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>oops</html>")

        with pytest.raises(AuthError, match="Authentication failed"):
            _provider(handler).authenticate("token")

    def test_unreachable_provider_fails_authentication(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(AuthError, match="Authentication failed"):
            _provider(handler).authenticate("token")


class TestConstruction:
    def test_requires_base_url(self) -> None:
        with pytest.raises(ValueError, match="supabase_url is required"):
            SupabaseIdentityProvider(base_url="", api_key="key", timeout_seconds=5)
