"""
Auth and Profile API Endpoints.

Registration, login, and the shop owner's business profile.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_user_id
from api.models import (
    AuthResponse,
    AuthUserResponse,
    LoginRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    RegisterRequest,
)
from domain.profile import AuthSession, UserProfile
from repositories.auth_repository import AuthenticationError
from repositories.profile_repository import get_profile, update_profile
from services.account_service import RegistrationRequest, login, register

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(session: AuthSession) -> AuthResponse:
    return AuthResponse(
        token=session.access_token,
        user=AuthUserResponse(
            id=session.user_id,
            username=session.username,
            business_name=session.business_name,
        ),
    )


def _profile_response(profile: UserProfile) -> ProfileResponse:
    return ProfileResponse(
        full_name=profile.full_name,
        first_name=profile.first_name,
        username=profile.username,
        business_name=profile.business_name,
        business_type=profile.business_type,
        contact_number=profile.contact_number,
    )


@router.post(
    "/auth/register",
    response_model=AuthResponse,
    status_code=201,
    summary="Register",
    description="Create a shop owner account and business profile."
)
def register_account(request: RegisterRequest):
    try:
        session = register(RegistrationRequest(**request.model_dump()))
        return _auth_response(session)
    except AuthenticationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Registration failed")
        raise HTTPException(status_code=500, detail=f"Failed to register: {str(e)}")


@router.post(
    "/auth/login",
    response_model=AuthResponse,
    summary="Login",
    description="Exchange email and password for a bearer token."
)
def login_account(request: LoginRequest):
    try:
        return _auth_response(login(request.email, request.password))
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except Exception as e:
        logger.exception("Login failed")
        raise HTTPException(status_code=500, detail=f"Failed to log in: {str(e)}")


@router.get("/users/profile", response_model=ProfileResponse, summary="Get Profile")
def read_profile(user_id: str = Depends(get_current_user_id)):
    try:
        profile = get_profile(user_id)
    except Exception as e:
        logger.exception("Profile lookup failed")
        raise HTTPException(status_code=500, detail=f"Failed to fetch profile: {str(e)}")

    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_response(profile)


@router.put("/users/profile", response_model=ProfileResponse, summary="Update Profile")
def edit_profile(request: ProfileUpdateRequest, user_id: str = Depends(get_current_user_id)):
    try:
        profile = update_profile(user_id, request.model_dump(exclude_none=True))
    except Exception as e:
        logger.exception("Profile update failed")
        raise HTTPException(status_code=500, detail=f"Failed to update profile: {str(e)}")

    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _profile_response(profile)
