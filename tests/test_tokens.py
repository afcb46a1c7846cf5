"""
Tests for token issuing and verification.
"""

from datetime import timedelta

import pytest
from jose import jwt

from livraria.auth import InvalidTokenError, TokenService


@pytest.fixture
def tokens():
    return TokenService("token-secret")


def test_issued_token_is_verified(tokens):
    token = tokens.issue({"id": "user-1", "email": "ana@x.com"})

    claims = tokens.verify(token)
    assert claims["id"] == "user-1"
    assert claims["email"] == "ana@x.com"
    assert claims["exp"] - claims["iat"] == 3600


def test_custom_ttl(tokens):
    claims = tokens.verify(tokens.issue({"id": "user-1"}, ttl=timedelta(minutes=5)))
    assert claims["exp"] - claims["iat"] == 300


def test_expired_token_is_rejected(tokens):
    token = tokens.issue({"id": "user-1"}, ttl=timedelta(seconds=-10))

    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_token_from_another_secret_is_rejected(tokens):
    forged = TokenService("another-secret").issue({"id": "user-1"})

    with pytest.raises(InvalidTokenError):
        tokens.verify(forged)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(tokens, token):
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_truncated_token_is_rejected(tokens):
    token = tokens.issue({"id": "user-1"})

    with pytest.raises(InvalidTokenError):
        tokens.verify(token[:-4])


def test_token_without_expiry_is_rejected(tokens):
    token = jwt.encode({"id": "user-1", "iat": 0}, "token-secret", algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        tokens.verify(token)
