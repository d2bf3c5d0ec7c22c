"""
Tests for token issuing and verification.
"""

import datetime

import jwt as pyjwt
import pytest

from ridehub.common.auth.jwt import (
    JWTConfig,
    generate_access_token,
    generate_refresh_token,
    get_jwt_config,
    set_jwt_config,
    verify_access_token,
    verify_refresh_token,
)
from ridehub.common.auth.user import TokenClaims, UserRole, UserStatus

CLAIMS = TokenClaims(
    id="user-1",
    email="rider@ridehub.test",
    role=UserRole.RIDER,
    status=UserStatus.ACTIVE,
)


@pytest.fixture(autouse=True)
def jwt_config():
    previous = get_jwt_config()
    config = JWTConfig(secret_key="access-secret", refresh_secret_key="refresh-secret")
    set_jwt_config(config)
    yield config
    set_jwt_config(previous)


def _forge(payload, key="access-secret"):
    return pyjwt.encode(payload, key, algorithm="HS256")


def test_access_token_round_trip():
    assert verify_access_token(generate_access_token(CLAIMS)) == CLAIMS


def test_refresh_token_round_trip():
    assert verify_refresh_token(generate_refresh_token(CLAIMS)) == CLAIMS


def test_token_payload(jwt_config):
    token = generate_access_token(CLAIMS)
    payload = pyjwt.decode(token, "access-secret", algorithms=["HS256"], issuer=jwt_config.token_issuer)

    assert payload["type"] == "access"
    assert payload["sub"] == "user-1"
    assert payload["role"] == "rider"
    assert payload["status"] == "active"
    assert payload["exp"] - payload["iat"] == 15 * 60


def test_tokens_are_unique():
    assert generate_access_token(CLAIMS) != generate_access_token(CLAIMS)


def test_token_types_are_not_interchangeable():
    assert verify_access_token(generate_refresh_token(CLAIMS)) is None
    assert verify_refresh_token(generate_access_token(CLAIMS)) is None


def test_refresh_token_signed_with_its_own_secret():
    token = generate_refresh_token(CLAIMS)
    with pytest.raises(pyjwt.InvalidSignatureError):
        pyjwt.decode(token, "access-secret", algorithms=["HS256"], options={"verify_iss": False})


def test_expired_token():
    now = datetime.datetime.now(datetime.timezone.utc)
    token = _forge({
        **CLAIMS.to_dict(),
        "sub": CLAIMS.id,
        "type": "access",
        "iss": "ridehub-api",
        "iat": now - datetime.timedelta(hours=1),
        "exp": now - datetime.timedelta(minutes=1),
    })
    assert verify_access_token(token) is None


def test_bad_signature():
    token = generate_access_token(CLAIMS)
    set_jwt_config(JWTConfig(secret_key="other-secret", refresh_secret_key="refresh-secret"))
    assert verify_access_token(token) is None


def test_wrong_issuer():
    now = datetime.datetime.now(datetime.timezone.utc)
    token = _forge({
        **CLAIMS.to_dict(),
        "sub": CLAIMS.id,
        "type": "access",
        "iss": "someone-else",
        "iat": now,
        "exp": now + datetime.timedelta(minutes=5),
    })
    assert verify_access_token(token) is None


@pytest.mark.parametrize("claims", [
    {"id": "user-1", "email": "a@b.co", "role": "superuser", "status": "active"},
    {"id": "user-1", "email": "a@b.co", "role": "rider", "status": "banned"},
    {"id": "user-1", "role": "rider", "status": "active"},
])
def test_malformed_claims(claims):
    now = datetime.datetime.now(datetime.timezone.utc)
    token = _forge({
        **claims,
        "sub": "user-1",
        "type": "access",
        "iss": "ridehub-api",
        "iat": now,
        "exp": now + datetime.timedelta(minutes=5),
    })
    assert verify_access_token(token) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_garbage(token):
    assert verify_access_token(token) is None
