"""
OIDC Identity Verifier

Verifies RS256-signed ID tokens (Firebase, Google, or any OIDC provider
publishing a JWKS document) and returns the token subject.
"""

import logging
import time
from typing import Any, Dict, Optional

import httpx
from jose import JWTError, jwt

from libs.result import Error, Result, Return
from src.app.services.identity_verifier import IIdentityVerifier

logger = logging.getLogger(__name__)


class OidcIdentityVerifier(IIdentityVerifier):
    """
    Identity verifier backed by a provider's JWKS endpoint.

    The JWKS document is cached in-process for cache_seconds and refetched
    once when an unknown key id shows up (provider key rotation). Issuer and
    audience are always checked; a Firebase project id is the audience and
    https://securetoken.google.com/<project-id> the issuer.
    """

    def __init__(
        self,
        jwks_url: str,
        issuer: str,
        audience: str,
        timeout: float = 5.0,
        cache_seconds: int = 3600,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not issuer or not audience:
            raise ValueError("OIDC issuer and audience must not be empty")
        self.jwks_url = jwks_url
        self.issuer = issuer
        self.audience = audience
        self.timeout = timeout
        self.cache_seconds = cache_seconds
        self._transport = transport
        self._jwks: Optional[Dict[str, Any]] = None
        self._fetched_at = 0.0

    async def _fetch_jwks(self) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.jwks_url)
            response.raise_for_status()
            data = response.json()
        if not isinstance(data, dict) or not isinstance(data.get("keys"), list):
            raise ValueError("invalid jwks document")
        self._jwks = data
        self._fetched_at = time.monotonic()
        return data

    async def _get_jwks(self, force: bool = False) -> Dict[str, Any]:
        fresh = (time.monotonic() - self._fetched_at) < self.cache_seconds
        if self._jwks is not None and fresh and not force:
            return self._jwks
        return await self._fetch_jwks()

    @staticmethod
    def _find_key(jwks: Dict[str, Any], kid: Optional[str]) -> Optional[Dict[str, Any]]:
        for key in jwks.get("keys", []):
            if isinstance(key, dict) and key.get("kid") == kid:
                return key
        return None

    async def verify(self, assertion: str) -> Result[str]:
        try:
            header = jwt.get_unverified_header(assertion)
        except JWTError:
            return Return.err(Error("INVALID_ASSERTION", "Invalid identity token"))

        kid = header.get("kid")
        try:
            jwks = await self._get_jwks()
            key = self._find_key(jwks, kid)
            if key is None:
                # Provider may have rotated its signing keys since the last fetch
                key = self._find_key(await self._get_jwks(force=True), kid)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error(f"Identity provider unavailable: {exc.__class__.__name__}")
            return Return.err(
                Error("IDENTITY_PROVIDER_UNAVAILABLE", "Identity provider unavailable")
            )

        if key is None:
            return Return.err(Error("INVALID_ASSERTION", "Invalid identity token"))

        try:
            claims = jwt.decode(
                assertion,
                key,
                algorithms=["RS256"],
                audience=self.audience,
                issuer=self.issuer,
            )
        except JWTError as exc:
            logger.info(f"Identity token rejected: {exc}")
            return Return.err(Error("INVALID_ASSERTION", "Invalid identity token"))

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            return Return.err(Error("INVALID_ASSERTION", "Invalid identity token"))

        return Return.ok(subject)
