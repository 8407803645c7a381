"""
Refresh Token Use Case

Rotates a refresh token: the presented token is revoked and a new one is
issued for the same owner, together with a fresh access token.
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.api.utils.jwt import AccessTokenSigner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditAction, AuditEvent, RevokeOutcome
from .dtos import TokenPair

logger = logging.getLogger(__name__)

UNAUTHORIZED = Error("UNAUTHORIZED", "Invalid refresh token")


class RefreshTokenUseCase:
    """
    Use case for refresh token rotation.

    Business Rules:
    - Unknown, revoked and expired tokens are rejected without any write
    - All rejections look the same to the caller (UNAUTHORIZED)
    - The old token is revoked and committed before the new one is created,
      so a failure in between leaves the session closed, never reusable
    - Only one concurrent refresh of the same token can win the revoke
    - Never retried: a failed rotation requires re-authentication
    """

    def __init__(self, uow: UnitOfWork, signer: AccessTokenSigner, refresh_ttl: timedelta):
        self.uow = uow
        self.signer = signer
        self.refresh_ttl = refresh_ttl

    async def execute(self, refresh_token: str) -> Result[TokenPair]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token value presented by the client

        Returns:
            Result with TokenPair, or Error (UNAUTHORIZED, STORE_UNAVAILABLE,
            ROTATION_FAILED)
        """
        async with self.uow:
            try:
                record = await self.uow.refresh_tokens.get_by_token(refresh_token)
            except SQLAlchemyError as exc:
                logger.error(f"Refresh token lookup failed: {exc.__class__.__name__}")
                return Return.err(Error("STORE_UNAVAILABLE", "Refresh token store unavailable"))

            if record is None:
                logger.warning("Refresh rejected: INVALID_TOKEN")
                return Return.err(UNAUTHORIZED)

            if record.revoked_at is not None:
                # Benign retry after a successful rotation, or replay of a stolen token.
                # TODO: revoke the whole rotation lineage once records track their parent
                logger.warning(
                    f"Refresh rejected: SESSION_REVOKED, refresh_token_id={record.id}"
                )
                return Return.err(UNAUTHORIZED)

            if record.expires_at <= utcnow():
                logger.warning(
                    f"Refresh rejected: SESSION_EXPIRED, refresh_token_id={record.id}"
                )
                return Return.err(UNAUTHORIZED)

            owner_id = record.owner_id
            old_id = record.id

            try:
                outcome = await self.uow.refresh_tokens.revoke(refresh_token)
                await self.uow.commit()
            except SQLAlchemyError as exc:
                logger.error(f"Refresh token revoke failed: {exc.__class__.__name__}")
                return Return.err(Error("STORE_UNAVAILABLE", "Refresh token store unavailable"))

            if outcome != RevokeOutcome.revoked:
                # A concurrent refresh consumed this token first
                logger.warning(
                    f"Refresh rejected: lost rotation race ({outcome.value}), "
                    f"refresh_token_id={old_id}"
                )
                return Return.err(UNAUTHORIZED)

            try:
                new_record = await self.uow.refresh_tokens.create(owner_id, self.refresh_ttl)
                await self.uow.audit_events.create(
                    AuditEvent(
                        owner_id=owner_id,
                        action=AuditAction.token_refresh.value,
                        event_metadata={
                            "revoked_refresh_token_id": str(old_id),
                            "refresh_token_id": str(new_record.id),
                        },
                    )
                )
                await self.uow.commit()
            except SQLAlchemyError as exc:
                logger.error(
                    f"Rotation failed after revoke, refresh_token_id={old_id}: "
                    f"{exc.__class__.__name__}"
                )
                return Return.err(
                    Error("ROTATION_FAILED", "Refresh token rotation failed, sign in again")
                )

            logger.info(f"Rotated refresh token {old_id} -> {new_record.id}")

            return Return.ok(
                TokenPair(
                    access_token=self.signer.issue(owner_id),
                    refresh_token=new_record.token,
                    owner_id=owner_id,
                )
            )
