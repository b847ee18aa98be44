"""
Shared FastAPI dependencies: settings, the authenticated user, and the sale source.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException

from config import Settings, load_settings
from repositories.auth_repository import AuthenticationError, get_user_id_for_token
from services.sale_source import SaleRecordSource, SupabaseSaleSource


def get_settings() -> Settings:
    return load_settings()


def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """
    Resolve `Authorization: Bearer <token>` to a user ID.

    Raises 401 when the header is missing or the token is rejected.
    """

    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="No authentication token found")

    token = authorization[len("bearer "):].strip()
    try:
        return get_user_id_for_token(token)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))


def get_sale_source(
    user_id: str = Depends(get_current_user_id),
    settings: Settings = Depends(get_settings),
) -> SaleRecordSource:
    return SupabaseSaleSource(user_id, tz=settings.tz)
