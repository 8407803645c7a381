from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from libs.result import Error, Result, Return
from src.domain.entities import AccessClaims


class AccessTokenSigner:
    """
    Issues and verifies stateless access tokens.

    Tokens are JWTs carrying sub, iat and exp, signed with a symmetric
    secret. verify() distinguishes MALFORMED_TOKEN, BAD_SIGNATURE and
    TOKEN_EXPIRED so callers can log the reason; callers must not expose
    the distinction to clients.
    """

    def __init__(self, secret: str, access_ttl: timedelta, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self.access_ttl = access_ttl
        self.algorithm = algorithm

    def issue(self, subject: str, ttl: Optional[timedelta] = None) -> str:
        """
        Create a signed access token for subject.

        Args:
            subject: Principal identifier (sub claim)
            ttl: Lifetime override, defaults to the configured access TTL

        Returns:
            JWT token string
        """
        # Whole seconds so that exp - iat == ttl exactly
        now = datetime.now(UTC).replace(microsecond=0)
        payload = {
            "sub": subject,
            "iat": now,
            "exp": now + (self.access_ttl if ttl is None else ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Result[AccessClaims]:
        """
        Verify signature and expiry, and decode the claim set.

        Args:
            token: JWT token string

        Returns:
            Result with AccessClaims, or Error
        """
        try:
            unverified = jwt.get_unverified_claims(token)
            AccessClaims.model_validate(unverified)
        except (JWTError, ValidationError):
            return Return.err(Error("MALFORMED_TOKEN", "Token could not be decoded"))

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))
        except JWTError:
            return Return.err(Error("BAD_SIGNATURE", "Token signature is invalid"))

        return Return.ok(AccessClaims.model_validate(payload))
