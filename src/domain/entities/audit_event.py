"""
AuditEvent Entity

Append-only log of credential issuance and rotation.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utcnow


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable record of a session credential event.

    Business Rules:
    - Immutable (never updated or deleted)
    - Written in the same transaction as the refresh token it describes
    - Never contains token values, only record ids
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    owner_id: Optional[str] = Field(default=None, max_length=255)

    action: str = Field(max_length=100)  # e.g., "token_exchange", "token_refresh"
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_owner_action", "owner_id", "action"),
    )
