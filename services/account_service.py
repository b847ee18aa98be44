"""
Account service for shop owner registration and login.

Registration creates the Supabase Auth user and its business profile; login
returns an access token together with the owner's display details.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from domain.profile import AuthSession, UserProfile
from repositories.auth_repository import AuthenticationError, sign_in, sign_up
from repositories.profile_repository import create_profile, get_profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegistrationRequest:
    email: str
    password: str
    full_name: str
    username: str
    business_name: str
    business_type: Optional[str] = None
    contact_number: Optional[str] = None


def register(request: RegistrationRequest) -> AuthSession:
    """
    Create an account and its profile.

    Raises:
        AuthenticationError: If Supabase rejects the sign-up or returns no session
            (e.g. when email confirmation is required before login)
    """

    auth_user = sign_up(request.email, request.password)

    profile = create_profile(
        UserProfile(
            user_id=auth_user.user_id,
            username=request.username,
            full_name=request.full_name,
            business_name=request.business_name,
            business_type=request.business_type,
            contact_number=request.contact_number,
            email=request.email,
        )
    )
    logger.info("Registered shop owner", extra={"user_id": profile.user_id, "username": profile.username})

    if not auth_user.access_token:
        raise AuthenticationError("Registration succeeded but no session was issued; confirm the email and log in")

    return AuthSession(
        access_token=auth_user.access_token,
        user_id=profile.user_id,
        username=profile.username,
        business_name=profile.business_name,
    )


def login(email: str, password: str) -> AuthSession:
    """
    Log in with email and password.

    Raises:
        AuthenticationError: If the credentials are rejected
    """

    auth_user = sign_in(email, password)
    if not auth_user.access_token:
        raise AuthenticationError("Invalid credentials: no session issued")

    profile = get_profile(auth_user.user_id)
    return AuthSession(
        access_token=auth_user.access_token,
        user_id=auth_user.user_id,
        username=profile.username if profile else (auth_user.email or ""),
        business_name=profile.business_name if profile else "",
    )


__all__ = ["RegistrationRequest", "register", "login"]
