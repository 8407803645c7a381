import secrets
from datetime import timedelta
from typing import Optional

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.refresh_token_repository import IRefreshTokenRepository
from src.domain.base import utcnow
from src.domain.entities import RefreshToken, RevokeOutcome

TOKEN_BYTES = 32


def generate_token_value() -> str:
    return secrets.token_urlsafe(TOKEN_BYTES)


class RefreshTokenRepository(IRefreshTokenRepository):
    """Refresh token repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, owner_id: str, ttl: timedelta) -> RefreshToken:
        """Create a new refresh token record"""
        now = utcnow()
        record = RefreshToken(
            owner_id=owner_id,
            token=generate_token_value(),
            created_at=now,
            expires_at=now + ttl,
        )
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """
        Get refresh token by value.

        Revoked and expired rows are returned as well; the caller decides
        what the record's state means.
        """
        stmt = select(RefreshToken).where(RefreshToken.token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def revoke(self, token: str) -> RevokeOutcome:
        """Conditionally revoke a token, stamped with the server clock"""
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.token == token, RefreshToken.revoked_at.is_(None))
            .values(revoked_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount > 0:
            return RevokeOutcome.revoked

        exists = await self.session.execute(
            select(RefreshToken.id).where(RefreshToken.token == token)
        )
        if exists.scalar_one_or_none() is None:
            return RevokeOutcome.not_found
        return RevokeOutcome.already_revoked
