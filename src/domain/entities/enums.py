"""
Session Service Domain Enums
"""

from enum import Enum


class RefreshTokenState(str, Enum):
    """Derived lifecycle state of a refresh token record"""

    active = "active"
    revoked = "revoked"
    expired = "expired"


class RevokeOutcome(str, Enum):
    """Result of a conditional revoke against the refresh token store"""

    revoked = "revoked"
    already_revoked = "already_revoked"
    not_found = "not_found"


class AuditAction(str, Enum):
    token_exchange = "token_exchange"
    token_refresh = "token_refresh"
