"""
Unit tests for AccessTokenSigner
"""

from datetime import timedelta

import pytest
from jose import jwt

from src.api.utils.jwt import AccessTokenSigner

TEST_SECRET = "test-secret-key"


def test_issue_and_verify_round_trip(signer):
    token = signer.issue("u1")

    result = signer.verify(token)

    assert result.is_ok()
    assert result.value.sub == "u1"


def test_expiry_is_issued_at_plus_ttl(signer):
    claims = jwt.get_unverified_claims(signer.issue("u1"))

    assert claims["exp"] - claims["iat"] == 15 * 60


def test_ttl_override(signer):
    claims = jwt.get_unverified_claims(signer.issue("u1", ttl=timedelta(seconds=30)))

    assert claims["exp"] - claims["iat"] == 30


def test_token_from_other_secret_is_bad_signature(signer):
    other = AccessTokenSigner("another-secret", access_ttl=timedelta(minutes=15))

    result = signer.verify(other.issue("u1"))

    assert result.is_err()
    assert result.error.code == "BAD_SIGNATURE"


def test_expired_token(signer):
    token = signer.issue("u1", ttl=timedelta(seconds=-5))

    result = signer.verify(token)

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED"


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c", "x" * 300])
def test_structurally_invalid_token_is_malformed(signer, token):
    result = signer.verify(token)

    assert result.is_err()
    assert result.error.code == "MALFORMED_TOKEN"


def test_token_without_subject_is_malformed(signer):
    token = jwt.encode({"iat": 1, "exp": 9999999999}, TEST_SECRET, algorithm="HS256")

    result = signer.verify(token)

    assert result.is_err()
    assert result.error.code == "MALFORMED_TOKEN"


def test_token_with_non_string_subject_is_malformed(signer):
    token = jwt.encode({"sub": 42, "iat": 1, "exp": 9999999999}, TEST_SECRET, algorithm="HS256")

    result = signer.verify(token)

    assert result.is_err()
    assert result.error.code == "MALFORMED_TOKEN"


def test_forged_and_expired_token_reports_bad_signature(signer):
    other = AccessTokenSigner("another-secret", access_ttl=timedelta(minutes=15))

    result = signer.verify(other.issue("u1", ttl=timedelta(seconds=-5)))

    assert result.error.code == "BAD_SIGNATURE"


def test_empty_secret_is_rejected():
    with pytest.raises(ValueError):
        AccessTokenSigner("", access_ttl=timedelta(minutes=15))
