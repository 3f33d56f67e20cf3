"""Core helpers for interacting with the Fitbit API."""

from __future__ import annotations

__version__ = "0.1.0"

from .auth import FITBIT_AUTHORIZATION_ENDPOINT, FITBIT_TOKEN_ENDPOINT
from .client import FitbitClient
from .config import FITBIT_API_BASE, ApiLocale, ApiUnitSystem
from .exceptions import (
    FitbitAPIError,
    InvalidArgumentError,
    MalformedResponseError,
    ServiceUnavailableError,
    TokenMissingError,
)
from .tokens import TokenData

__all__ = [
    "FITBIT_API_BASE",
    "FITBIT_AUTHORIZATION_ENDPOINT",
    "FITBIT_TOKEN_ENDPOINT",
    "ApiLocale",
    "ApiUnitSystem",
    "FitbitAPIError",
    "FitbitClient",
    "InvalidArgumentError",
    "MalformedResponseError",
    "ServiceUnavailableError",
    "TokenData",
    "TokenMissingError",
    "__version__",
]
