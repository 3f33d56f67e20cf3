"""Build versioned Fitbit API requests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from . import __version__
from .config import ClientConfig

USER_AGENT = f"fitbit-client v{__version__}"

SUPPORTED_METHODS = ("GET", "POST", "DELETE")


@dataclass(frozen=True)
class PreparedRequest:
    """A request ready to be sent through a session handle."""

    method: str
    path: str
    headers: Dict[str, str]
    body: Optional[str] = None


def default_headers(config: ClientConfig) -> Dict[str, str]:
    return {
        "User-Agent": USER_AGENT,
        "Accept-Language": config.unit_system,
        "Accept-Locale": config.locale,
    }


def build_request(
    config: ClientConfig,
    method: str,
    path: str,
    body: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> PreparedRequest:
    """Version ``path`` and merge the default headers over ``headers``.

    Defaults win when a caller header uses the same name. The config is read
    on every call so later changes to it apply to subsequent requests.
    """
    verb = method.upper()
    if verb not in SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")

    merged_headers: Dict[str, str] = dict(headers or {})
    merged_headers.update(default_headers(config))
    return PreparedRequest(
        method=verb,
        path=f"/{config.api_version}{path}",
        headers=merged_headers,
        body=body,
    )
