"""
RefreshToken Entity

Server-tracked refresh credential. One row per issued token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow
from .enums import RefreshTokenState


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - opaque refresh credential issued to a principal.

    Business Rules:
    - token is unique for the lifetime of the table (rows are never deleted)
    - owner_id, token and expires_at never change after creation
    - revoked_at is set once (rotation or logout) and never cleared
    - Expiry is derived from expires_at, never written
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    owner_id: str = Field(max_length=255, nullable=False, index=True)
    token: str = Field(max_length=128, unique=True, nullable=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_refresh_token_expires_at", "expires_at"),
    )

    def state(self, now: Optional[datetime] = None) -> RefreshTokenState:
        if self.revoked_at is not None:
            return RefreshTokenState.revoked
        if self.expires_at <= (now or utcnow()):
            return RefreshTokenState.expired
        return RefreshTokenState.active

    def is_active(self, now: Optional[datetime] = None) -> bool:
        return self.state(now) == RefreshTokenState.active
