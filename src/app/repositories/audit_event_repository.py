from abc import ABC, abstractmethod
from typing import List

from src.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def get_by_owner_id(self, owner_id: str, limit: int = 50) -> List[AuditEvent]:
        """Get the most recent audit events for a principal, newest first"""
        pass
