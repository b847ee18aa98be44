"""
Profile repository for shop owner accounts.

Provides functions to read and update the business profile stored alongside
each Supabase Auth user.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from domain.profile import UserProfile
from repositories.client import get_supabase

_PROFILES_TABLE: str = "profiles"

# Columns a user may change after registration.
EDITABLE_FIELDS = ("full_name", "business_name", "business_type", "contact_number")


def _row_to_profile(row: Mapping[str, Any]) -> UserProfile:
    return UserProfile(
        user_id=str(row["user_id"]),
        username=str(row["username"]),
        full_name=str(row.get("full_name") or ""),
        business_name=str(row.get("business_name") or ""),
        business_type=row.get("business_type"),
        contact_number=row.get("contact_number"),
        email=row.get("email"),
    )


def create_profile(profile: UserProfile) -> UserProfile:
    """Insert the profile row for a newly registered user."""

    now = datetime.now(timezone.utc).isoformat()
    payload: dict[str, Any] = {
        "user_id": profile.user_id,
        "username": profile.username,
        "full_name": profile.full_name,
        "business_name": profile.business_name,
        "business_type": profile.business_type,
        "contact_number": profile.contact_number,
        "email": profile.email,
        "created_at_utc": now,
        "updated_at_utc": now,
    }

    response = get_supabase().table(_PROFILES_TABLE).insert(payload).execute()
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to create profile: {error}")

    return profile


def get_profile(user_id: str) -> Optional[UserProfile]:
    """
    Get a profile by user ID.

    Returns:
        UserProfile or None if not found
    """

    response = (
        get_supabase()
        .table(_PROFILES_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to fetch profile: {error}")

    rows = getattr(response, "data", None) or []
    if not rows:
        return None
    return _row_to_profile(rows[0])


def update_profile(user_id: str, changes: Mapping[str, Any]) -> Optional[UserProfile]:
    """
    Apply changes to the editable profile fields.

    Unknown keys and None values are ignored.

    Returns:
        The updated UserProfile, or None if the user has no profile
    """

    payload: dict[str, Any] = {
        key: value for key, value in changes.items()
        if key in EDITABLE_FIELDS and value is not None
    }

    if payload:
        payload["updated_at_utc"] = datetime.now(timezone.utc).isoformat()
        response = (
            get_supabase()
            .table(_PROFILES_TABLE)
            .update(payload)
            .eq("user_id", user_id)
            .execute()
        )
        error = getattr(response, "error", None)
        if error:
            raise RuntimeError(f"Failed to update profile: {error}")

    return get_profile(user_id)


__all__ = ["create_profile", "get_profile", "update_profile", "EDITABLE_FIELDS"]
