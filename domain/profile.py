"""
Domain: Shop owner accounts.

Represents the authenticated user who owns products and sales, together with
the business profile captured at registration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class UserProfile:
    """
    Business profile for a shop owner.

    Supports:
    - Display name used on the home screen (first_name)
    - Business details printed on reports and receipts
    """

    user_id: str
    username: str
    full_name: str
    business_name: str

    # Optional profile information
    business_type: Optional[str] = None
    contact_number: Optional[str] = None
    email: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("user_id is required")
        if not self.username:
            raise ValueError("username is required")

    @property
    def first_name(self) -> str:
        """First word of the full name, or the username when no name is set."""
        parts = self.full_name.split()
        return parts[0] if parts else self.username


@dataclass(frozen=True, slots=True)
class AuthSession:
    """Access token issued on login or registration, plus the user it belongs to."""

    access_token: str
    user_id: str
    username: str
    business_name: str
