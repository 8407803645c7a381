from datetime import timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.api.utils.jwt import AccessTokenSigner

TEST_SECRET = "test-secret-key"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.refresh_tokens = MagicMock()
    uow.refresh_tokens.create = AsyncMock()
    uow.refresh_tokens.get_by_token = AsyncMock()
    uow.refresh_tokens.revoke = AsyncMock()

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()
    return uow


@pytest.fixture
def signer():
    return AccessTokenSigner(TEST_SECRET, access_ttl=timedelta(minutes=15))
