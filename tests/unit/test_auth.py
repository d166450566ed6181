from datetime import timedelta

import pytest
from src.core.auth import Role, TokenError, create_access_token, decode_access_token


def test_create_and_decode_token_roundtrip() -> None:
    token = create_access_token(
        "user-123", role="student", name="Jo Student", email="user@example.com"
    )

    payload = decode_access_token(token)

    assert payload["sub"] == "user-123"
    assert payload["role"] == "student"
    assert payload["name"] == "Jo Student"
    assert payload["email"] == "user@example.com"


def test_create_token_rejects_unknown_role() -> None:
    with pytest.raises(TokenError):
        create_access_token("user-123", role="janitor")


def test_expired_token_is_rejected() -> None:
    token = create_access_token("user-123", role="admin", expires_delta=timedelta(seconds=-5))

    with pytest.raises(TokenError):
        decode_access_token(token)


def test_tampered_token_is_rejected() -> None:
    token = create_access_token("user-123", role="student")

    with pytest.raises(TokenError):
        decode_access_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))


def test_role_contains() -> None:
    assert Role.contains("supervisor")
    assert not Role.contains("all")
