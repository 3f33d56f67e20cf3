"""Tests for the token helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from requests_oauth2client import BearerToken

from fitbit_client.tokens import TokenData, coerce_token


def test_from_dict_normalizes_scope():
    token = TokenData.from_dict(
        {
            "access_token": "abc",
            "refresh_token": "refresh",
            "expires_at": "2099-01-01T00:00:00+00:00",
            "scope": "activity location",
            "token_type": "Bearer",
        }
    )

    assert token.scope == ["activity", "location"]
    assert token.refresh_token == "refresh"
    assert not token.is_expired()


def test_from_dict_converts_expires_in():
    before = datetime.now(timezone.utc)
    token = TokenData.from_dict({"access_token": "abc", "expires_in": 3600})

    assert token.expires_at is not None
    assert before + timedelta(seconds=3590) <= token.expires_at
    assert "expires_in" not in token.as_serializable_dict()


def test_from_dict_accepts_zulu_timestamps():
    token = TokenData.from_dict(
        {"access_token": "abc", "expires_at": "2024-01-01T00:00:00Z"}
    )

    assert token.expires_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert token.is_expired()


def test_is_expired_compares_with_now():
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    past = TokenData("abc", expires_at=now - timedelta(seconds=1))
    future = TokenData("abc", expires_at=now + timedelta(hours=1))

    assert past.is_expired(now=now)
    assert not future.is_expired(now=now)
    assert future.is_expired(now=now, leeway=timedelta(hours=2))


def test_token_without_expiry_never_expires():
    assert not TokenData("abc").is_expired()


def test_serializable_dict_round_trip():
    expires_at = datetime.now(timezone.utc) + timedelta(hours=1)
    token = TokenData(
        access_token="abc",
        refresh_token="def",
        token_type="Bearer",
        expires_at=expires_at,
        scope=["activity"],
    )

    saved = token.as_serializable_dict()
    restored = TokenData.from_dict(saved)

    assert saved["scope"] == "activity"
    assert restored.access_token == "abc"
    assert restored.refresh_token == "def"
    assert restored.expires_at == expires_at


def test_from_bearer_token():
    bearer = BearerToken("new-access", refresh_token="new-refresh")

    token = TokenData.from_bearer_token(bearer)

    assert token.access_token == "new-access"
    assert token.refresh_token == "new-refresh"
    assert token.expires_at is None


def test_coerce_token_variants():
    existing = TokenData("abc")

    assert coerce_token(None) is None
    assert coerce_token("") is None
    assert coerce_token(existing) is existing
    assert coerce_token("xyz").access_token == "xyz"
    assert coerce_token({"access_token": "m"}).access_token == "m"
    with pytest.raises(TypeError):
        coerce_token(42)  # type: ignore[arg-type]
