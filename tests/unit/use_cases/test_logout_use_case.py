"""
Unit tests for Logout Use Case
"""

import logging

import pytest
from sqlalchemy.exc import OperationalError

from src.app.use_cases.auth.logout_use_case import LogoutUseCase
from src.domain.entities import RevokeOutcome


@pytest.mark.asyncio
async def test_logout_revokes_token(mock_uow):
    mock_uow.refresh_tokens.revoke.return_value = RevokeOutcome.revoked

    result = await LogoutUseCase(mock_uow).execute("token")

    assert result.is_ok()
    assert result.value.revoke_outcome == RevokeOutcome.revoked
    mock_uow.refresh_tokens.revoke.assert_called_once_with("token")
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_logout_twice_is_ok(mock_uow):
    mock_uow.refresh_tokens.revoke.return_value = RevokeOutcome.already_revoked

    result = await LogoutUseCase(mock_uow).execute("token")

    assert result.is_ok()
    assert result.value.revoke_outcome == RevokeOutcome.already_revoked


@pytest.mark.asyncio
async def test_logout_absorbs_store_failure_and_logs_it(mock_uow, caplog):
    mock_uow.refresh_tokens.revoke.side_effect = OperationalError(
        "UPDATE refresh_tokens", {}, Exception("connection refused")
    )

    with caplog.at_level(logging.WARNING):
        result = await LogoutUseCase(mock_uow).execute("token")

    assert result.is_ok()
    assert result.value.revoke_outcome is None
    mock_uow.commit.assert_not_called()

    records = [r for r in caplog.records if getattr(r, "audit_action", None) == "logout"]
    assert len(records) == 1
    assert records[0].audit_outcome == "store_unavailable"
    assert records[0].error_type == "OperationalError"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [ConnectionRefusedError(111, "Connection refused"), TimeoutError()],
)
async def test_logout_absorbs_unwrapped_driver_failure(mock_uow, caplog, error):
    mock_uow.refresh_tokens.revoke.side_effect = error

    with caplog.at_level(logging.WARNING):
        result = await LogoutUseCase(mock_uow).execute("token")

    assert result.is_ok()
    assert result.value.revoke_outcome is None

    records = [r for r in caplog.records if getattr(r, "audit_action", None) == "logout"]
    assert len(records) == 1
    assert records[0].audit_outcome == "store_unavailable"
    assert records[0].error_type == error.__class__.__name__
