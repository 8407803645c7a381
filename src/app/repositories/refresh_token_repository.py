from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional

from src.domain.entities import RefreshToken, RevokeOutcome


class IRefreshTokenRepository(ABC):
    """Refresh token repository interface - application layer"""

    @abstractmethod
    async def create(self, owner_id: str, ttl: timedelta) -> RefreshToken:
        """Persist a new active refresh token with a freshly generated value"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[RefreshToken]:
        """Point lookup by token value. No revoked/expired filtering."""
        pass

    @abstractmethod
    async def revoke(self, token: str) -> RevokeOutcome:
        """
        Set revoked_at on the matching record if it is not revoked yet.

        Revoking twice is a no-op. Only one concurrent caller can observe
        RevokeOutcome.revoked for a given token.
        """
        pass
