"""
Authentication repository.

Thin wrapper around Supabase Auth: account creation, password login, and
resolving a bearer token to its user ID. Supabase errors are converted to
AuthenticationError so callers only deal with one failure type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from repositories.client import get_supabase


class AuthenticationError(Exception):
    """Raised when credentials or an access token are rejected."""
    pass


@dataclass(frozen=True, slots=True)
class AuthUser:
    user_id: str
    email: Optional[str]
    access_token: Optional[str]


def _to_auth_user(response: Any) -> AuthUser:
    user = getattr(response, "user", None)
    if user is None:
        raise AuthenticationError("Authentication failed: no user returned")

    session = getattr(response, "session", None)
    return AuthUser(
        user_id=str(user.id),
        email=getattr(user, "email", None),
        access_token=getattr(session, "access_token", None) if session else None,
    )


def sign_up(email: str, password: str) -> AuthUser:
    """Create a new Supabase Auth user."""

    try:
        response = get_supabase().auth.sign_up({"email": email, "password": password})
    except Exception as e:
        raise AuthenticationError(f"Registration failed: {e}") from e
    return _to_auth_user(response)


def sign_in(email: str, password: str) -> AuthUser:
    """Exchange email/password for an access token."""

    try:
        response = get_supabase().auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        raise AuthenticationError(f"Invalid credentials: {e}") from e
    return _to_auth_user(response)


def get_user_id_for_token(access_token: str) -> str:
    """
    Resolve a bearer token to the user ID it was issued for.

    Raises:
        AuthenticationError: If the token is missing, expired, or invalid
    """

    if not access_token:
        raise AuthenticationError("No authentication token found")

    try:
        response = get_supabase().auth.get_user(access_token)
    except Exception as e:
        raise AuthenticationError(f"Invalid or expired token: {e}") from e

    return _to_auth_user(response).user_id


__all__ = [
    "AuthenticationError",
    "AuthUser",
    "sign_up",
    "sign_in",
    "get_user_id_for_token",
]
