"""
Logout Use Case

Best-effort revocation of the presented refresh token.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logging out.

    Business Rules:
    - Always succeeds; the client cookie is cleared whatever happens here
    - Store failures are absorbed but logged for audit
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[LogoutResponse]:
        try:
            async with self.uow:
                outcome = await self.uow.refresh_tokens.revoke(refresh_token)
                await self.uow.commit()
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            # Driver connect errors and timeouts are not always wrapped by SQLAlchemy
            logger.warning(
                "Logout revoke failed, client credential cleared anyway",
                extra={
                    "audit_action": "logout",
                    "audit_outcome": "store_unavailable",
                    "error_type": exc.__class__.__name__,
                },
            )
            return Return.ok(LogoutResponse(revoke_outcome=None))

        logger.info(
            f"Logout revoke: {outcome.value}",
            extra={"audit_action": "logout", "audit_outcome": outcome.value},
        )
        return Return.ok(LogoutResponse(revoke_outcome=outcome))
