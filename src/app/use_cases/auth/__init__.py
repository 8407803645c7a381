"""
Authentication Use Cases

Session credential issuance, rotation and revocation.
"""

from .exchange_token_use_case import ExchangeTokenUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .dtos import LogoutResponse, TokenPair

__all__ = [
    # Use Cases
    "ExchangeTokenUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # DTOs
    "TokenPair",
    "LogoutResponse",
]
