"""Client credentials, per-client settings and environment loading."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .exceptions import InvalidArgumentError

FITBIT_API_BASE = "https://api.fitbit.com"
API_VERSION = "1"

# The Fitbit API resolves "-" to the user that owns the access token.
DEFAULT_USER_ID = "-"

REQUIRED_OPTIONS = ("consumer_key", "consumer_secret")


class ApiUnitSystem:
    """Values accepted by the ``Accept-Language`` header."""

    US = "en_US"
    UK = "en_GB"
    # Anything other than en_US or en_GB is answered in metric units.
    METRIC = "METRIC"


class ApiLocale:
    """Values accepted by the ``Accept-Locale`` header."""

    AU = "en_AU"
    FR = "fr_FR"
    DE = "de_DE"
    JP = "ja_JP"
    NZ = "en_NZ"
    ES = "es_ES"
    UK = "en_GB"
    US = "en_US"


@dataclass(frozen=True)
class Credentials:
    """OAuth2 application credentials."""

    consumer_key: str
    consumer_secret: str

    @classmethod
    def from_options(cls, **options: Optional[str]) -> "Credentials":
        """Validate the required options and build the credential record.

        Raises:
            InvalidArgumentError: If any required option is missing or empty.
        """
        missing = [name for name in REQUIRED_OPTIONS if not options.get(name)]
        if missing:
            raise InvalidArgumentError(missing)
        return cls(
            consumer_key=str(options["consumer_key"]),
            consumer_secret=str(options["consumer_secret"]),
        )


@dataclass
class ClientConfig:
    """Settings read by the request builder on every call."""

    user_id: str = DEFAULT_USER_ID
    unit_system: str = ApiUnitSystem.US
    locale: str = ApiLocale.US
    api_version: str = API_VERSION
    base_url: str = FITBIT_API_BASE
    timeout: Optional[float] = None


_ENV_OPTIONS = {
    "FB_CLIENT_ID": "consumer_key",
    "FB_CLIENT_SECRET": "consumer_secret",
    "FB_USER_ID": "user_id",
    "FB_UNIT_SYSTEM": "unit_system",
    "FB_LOCALE": "locale",
}


def load_options_from_env(
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Collect client options from ``FB_*`` environment variables.

    Only variables that are set and non-empty are returned. ``FB_ACCESS_TOKEN``
    and ``FB_REFRESH_TOKEN`` are folded into a ``token`` mapping.
    """
    env = os.environ if environ is None else environ
    options: Dict[str, Any] = {}
    for variable, option in _ENV_OPTIONS.items():
        value = env.get(variable)
        if value:
            options[option] = value

    access_token = env.get("FB_ACCESS_TOKEN")
    if access_token:
        token: Dict[str, Any] = {"access_token": access_token}
        refresh_token = env.get("FB_REFRESH_TOKEN")
        if refresh_token:
            token["refresh_token"] = refresh_token
        options["token"] = token
    return options
