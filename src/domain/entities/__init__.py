"""
Session Service Domain Entities
"""

from .enums import AuditAction, RefreshTokenState, RevokeOutcome

from .refresh_token import RefreshToken
from .audit_event import AuditEvent
from .access_claims import AccessClaims

__all__ = [
    # Enums
    "AuditAction",
    "RefreshTokenState",
    "RevokeOutcome",
    # Entities
    "RefreshToken",
    "AuditEvent",
    "AccessClaims",
]
