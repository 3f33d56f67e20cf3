"""Tests for credential validation and environment loading."""

from __future__ import annotations

import pytest

from fitbit_client.config import (
    ApiLocale,
    ApiUnitSystem,
    ClientConfig,
    Credentials,
    load_options_from_env,
)
from fitbit_client.exceptions import InvalidArgumentError


def test_credentials_from_options():
    credentials = Credentials.from_options(consumer_key="key", consumer_secret="secret")

    assert credentials.consumer_key == "key"
    assert credentials.consumer_secret == "secret"


@pytest.mark.parametrize(
    "options, missing",
    [
        ({"consumer_secret": "secret"}, ("consumer_key",)),
        ({"consumer_key": "key"}, ("consumer_secret",)),
        ({}, ("consumer_key", "consumer_secret")),
        (
            {"consumer_key": "", "consumer_secret": None},
            ("consumer_key", "consumer_secret"),
        ),
    ],
)
def test_credentials_name_missing_options(options, missing):
    with pytest.raises(InvalidArgumentError) as exc_info:
        Credentials.from_options(**options)

    assert exc_info.value.missing == missing
    assert str(exc_info.value) == f"Missing required options: {','.join(missing)}"


def test_client_config_defaults():
    config = ClientConfig()

    assert config.user_id == "-"
    assert config.unit_system == ApiUnitSystem.US == "en_US"
    assert config.locale == ApiLocale.US == "en_US"
    assert config.api_version == "1"
    assert config.base_url == "https://api.fitbit.com"
    assert config.timeout is None


def test_load_options_from_env():
    options = load_options_from_env(
        {
            "FB_CLIENT_ID": "key",
            "FB_CLIENT_SECRET": "secret",
            "FB_ACCESS_TOKEN": "access",
            "FB_REFRESH_TOKEN": "refresh",
            "FB_LOCALE": ApiLocale.JP,
            "FB_USER_ID": "",
        }
    )

    assert options == {
        "consumer_key": "key",
        "consumer_secret": "secret",
        "locale": "ja_JP",
        "token": {"access_token": "access", "refresh_token": "refresh"},
    }


def test_load_options_from_env_ignores_refresh_without_access():
    assert load_options_from_env({"FB_REFRESH_TOKEN": "refresh"}) == {}
