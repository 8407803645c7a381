"""
Exchange Token Use Case

Turns an identity provider assertion into an access token and the first
refresh token of a new session.
"""

import logging
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from libs.result import Error, Result, Return
from src.api.utils.jwt import AccessTokenSigner
from src.app.services.identity_verifier import IIdentityVerifier
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent
from .dtos import TokenPair

logger = logging.getLogger(__name__)


class ExchangeTokenUseCase:
    """
    Use case for exchanging an identity assertion for session credentials.

    Business Rules:
    - The assertion is verified by the external identity provider
    - Exactly one refresh token is created, with no predecessor to revoke
    - Refresh token and audit event are committed together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        identity_verifier: IIdentityVerifier,
        signer: AccessTokenSigner,
        refresh_ttl: timedelta,
    ):
        self.uow = uow
        self.identity_verifier = identity_verifier
        self.signer = signer
        self.refresh_ttl = refresh_ttl

    async def execute(self, id_token: str) -> Result[TokenPair]:
        """
        Execute exchange use case.

        Args:
            id_token: Identity assertion issued by the identity provider

        Returns:
            Result with TokenPair, or Error (INVALID_ASSERTION,
            IDENTITY_PROVIDER_UNAVAILABLE, STORE_UNAVAILABLE)
        """
        verified = await self.identity_verifier.verify(id_token)
        if verified.is_err():
            return verified

        subject = verified.value

        async with self.uow:
            try:
                record = await self.uow.refresh_tokens.create(subject, self.refresh_ttl)
                await self.uow.audit_events.create(
                    AuditEvent(
                        owner_id=subject,
                        action=AuditAction.token_exchange.value,
                        event_metadata={"refresh_token_id": str(record.id)},
                    )
                )
                await self.uow.commit()
            except SQLAlchemyError as exc:
                logger.error(f"Failed to store refresh token: {exc.__class__.__name__}")
                return Return.err(
                    Error("STORE_UNAVAILABLE", "Failed to store refresh token")
                )

            logger.info(f"Issued session credentials, refresh_token_id={record.id}")

            return Return.ok(
                TokenPair(
                    access_token=self.signer.issue(subject),
                    refresh_token=record.token,
                    owner_id=subject,
                )
            )
