import logging
from dataclasses import dataclass
from datetime import timedelta
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.oidc_identity_verifier import OidcIdentityVerifier
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import unauthorized
from src.api.utils.jwt import AccessTokenSigner
from src.app.services.identity_verifier import IIdentityVerifier

logger = logging.getLogger(__name__)

engine = create_async_engine(
    ApplicationConfig.DB_URI,
    echo=False,
    future=True,
    connect_args={"timeout": ApplicationConfig.DB_CONNECT_TIMEOUT_SECONDS},
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionSettings:
    refresh_ttl: timedelta
    cookie_secure: bool


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved by get_current_principal"""

    user_id: str


session_settings = SessionSettings(
    refresh_ttl=timedelta(seconds=ApplicationConfig.REFRESH_TOKEN_TTL_SECONDS),
    cookie_secure=ApplicationConfig.COOKIE_SECURE,
)

access_token_signer = AccessTokenSigner(
    secret=ApplicationConfig.JWT_SECRET,
    access_ttl=timedelta(seconds=ApplicationConfig.ACCESS_TOKEN_TTL_SECONDS),
    algorithm=ApplicationConfig.JWT_ALGORITHM,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_session_settings() -> SessionSettings:
    return session_settings


def get_access_token_signer() -> AccessTokenSigner:
    return access_token_signer


@lru_cache
def get_identity_verifier() -> IIdentityVerifier:
    """Built on first use; raises ValueError when OIDC issuer or audience is unset"""
    return OidcIdentityVerifier(
        jwks_url=ApplicationConfig.OIDC_JWKS_URL,
        issuer=ApplicationConfig.OIDC_ISSUER,
        audience=ApplicationConfig.OIDC_AUDIENCE,
        timeout=ApplicationConfig.IDENTITY_PROVIDER_TIMEOUT_SECONDS,
        cache_seconds=ApplicationConfig.OIDC_JWKS_CACHE_SECONDS,
    )


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    signer: AccessTokenSigner = Depends(get_access_token_signer),
) -> Principal:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Args:
        credentials: Bearer token from Authorization header (None when the
            header is missing or does not use the Bearer scheme)

    Returns:
        Principal for the token subject

    Raises:
        ClientError: 401 UNAUTHORIZED for any missing, malformed, forged or
            expired token
    """
    if credentials is None:
        raise unauthorized()

    result = signer.verify(credentials.credentials)
    if result.is_err():
        logger.info(f"Access token rejected: {result.error.code}")
        raise unauthorized()

    return Principal(user_id=result.value.sub)
