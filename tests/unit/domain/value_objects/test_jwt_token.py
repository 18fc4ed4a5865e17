from datetime import timezone

import pytest

from signet.domain.value_objects.jwt_token import AccessTokenClaims


@pytest.fixture
def payload():
    return {
        "sub": "42",
        "email": "ada@example.com",
        "name": "Ada Lovelace",
        "iat": 1700000000,
        "exp": 1700003600,
        "jti": "0123456789abcdef",
        "type": "access",
    }


def test_from_payload(payload):
    claims = AccessTokenClaims.from_payload(payload)
    assert claims.user_id == 42
    assert claims.expires_at.tzinfo == timezone.utc
    assert claims.to_public_dict() == {
        "sub": "42",
        "email": "ada@example.com",
        "name": "Ada Lovelace",
        "iat": 1700000000,
    }


def test_name_is_optional(payload):
    del payload["name"]
    assert AccessTokenClaims.from_payload(payload).name is None


def test_missing_claims_are_rejected(payload):
    del payload["email"]
    with pytest.raises(ValueError, match="Missing required claims"):
        AccessTokenClaims.from_payload(payload)


def test_refresh_token_is_not_an_access_token(payload):
    payload["type"] = "refresh"
    with pytest.raises(ValueError, match="not an access token"):
        AccessTokenClaims.from_payload(payload)
