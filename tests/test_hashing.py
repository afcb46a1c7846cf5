"""
Tests for password hashing.
"""

from livraria.auth import hash_password, verify_password


def test_hash_is_salted():
    first = hash_password("12345678")
    second = hash_password("12345678")

    assert first != second
    assert "12345678" not in first


def test_verify_matches_only_the_original_secret():
    digest = hash_password("correct horse")

    assert verify_password("correct horse", digest) is True
    assert verify_password("wrong horse", digest) is False


def test_verify_returns_false_on_malformed_digest():
    assert verify_password("12345678", "not-a-hash") is False
    assert verify_password("12345678", "") is False
