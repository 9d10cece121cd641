"""Request authentication dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

import jwt
from fastapi import Cookie, Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from hotel_booking.containers import AppContainer


def _get_settings_value(request: Request, name: str) -> str:
    container: AppContainer = request.app.state.container
    return getattr(container.settings, name)


def _get_admin_token(request: Request) -> str:
    return _get_settings_value(request, "admin_token")


def _get_jwt_secret(request: Request) -> str:
    return _get_settings_value(request, "jwt_secret_key")


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


async def current_user_id(
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
    secret: str = Depends(_get_jwt_secret),
) -> str:
    """Return the user id carried by the caller's session token."""
    token = auth_token or _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        payload = jwt.decode(token, secret, algorithms=["HS256"])
    except jwt.InvalidTokenError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc
    user_id = payload.get("userId")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return str(user_id)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, value = authorization.partition(" ")
    if scheme.lower() != "bearer" or not value:
        return None
    return value.strip()
