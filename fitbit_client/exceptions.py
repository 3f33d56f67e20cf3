"""Exceptions raised by the Fitbit client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Optional, Tuple

if TYPE_CHECKING:
    import requests


class FitbitAPIError(RuntimeError):
    """Raised when Fitbit API interactions fail."""


class InvalidArgumentError(FitbitAPIError, ValueError):
    """Raised when required client options are missing."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing: Tuple[str, ...] = tuple(missing)
        super().__init__(f"Missing required options: {','.join(self.missing)}")


class ServiceUnavailableError(FitbitAPIError):
    """Raised when the Fitbit API answers with HTTP 503."""

    def __init__(self, response: Optional["requests.Response"] = None) -> None:
        self.response = response
        super().__init__("Fitbit API is unavailable (503).")


class MalformedResponseError(FitbitAPIError, ValueError):
    """Raised when a non-empty response body is not valid JSON."""

    def __init__(self, body: str) -> None:
        self.body = body
        preview = body[:80]
        super().__init__(f"Fitbit API returned a malformed body: {preview!r}")


class TokenMissingError(FitbitAPIError):
    """Raised when an authenticated operation runs without a token."""
