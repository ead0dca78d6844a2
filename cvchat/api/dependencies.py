from fastapi import Depends, Header, Request

from cvchat.api.services import AppServices


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def get_current_principal(
    authorization: str | None = Header(default=None),
    services: AppServices = Depends(get_services),
) -> str:
    """Resolve the bearer token to a principal id; AuthError becomes a 401."""
    token = (authorization or "").strip()
    if token[:7].lower() == "bearer ":
        token = token[7:].strip()
    return services.identity_provider.authenticate(token)
