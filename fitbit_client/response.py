"""Turn raw Fitbit API responses into parsed bodies."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Optional

import structlog

from .exceptions import MalformedResponseError, ServiceUnavailableError

if TYPE_CHECKING:
    import requests

logger = structlog.get_logger(__name__)


def normalize_response(response: Optional["requests.Response"]) -> Any:
    """Return the parsed JSON body of ``response``.

    A missing response or an empty body yields an empty dict. Only 503 is
    treated as an error here; other statuses fall through to body parsing.

    Raises:
        ServiceUnavailableError: If the API answered with HTTP 503.
        MalformedResponseError: If a non-empty body is not valid JSON.
    """
    if response is None:
        return {}

    if response.status_code == 503:
        logger.warning("service_unavailable", url=getattr(response, "url", None))
        raise ServiceUnavailableError(response)

    body = response.text
    if not body:
        return {}

    try:
        return json.loads(body)
    except ValueError as exc:
        logger.error(
            "malformed_response",
            status=response.status_code,
            length=len(body),
        )
        raise MalformedResponseError(body) from exc
