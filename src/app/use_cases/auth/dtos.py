"""
Authentication Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import RevokeOutcome


class TokenPair(BaseModel):
    """Access token plus the refresh token that must go into the cookie"""

    access_token: str
    refresh_token: str
    owner_id: str


class LogoutResponse(BaseModel):
    """Outcome of a best-effort logout. revoke_outcome is None when the store failed."""

    revoke_outcome: Optional[RevokeOutcome] = None
