"""Fitbit API client facade used by endpoint modules."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests
import structlog

from .auth import TokenExchanger
from .config import (
    DEFAULT_USER_ID,
    ApiLocale,
    ApiUnitSystem,
    ClientConfig,
    Credentials,
    load_options_from_env,
)
from .request_builder import build_request
from .response import normalize_response
from .session import TokenManager
from .tokens import TokenData, TokenLike

logger = structlog.get_logger(__name__)


class FitbitClient:
    """Authenticated, versioned access to the Fitbit Web API.

    A client created without a token can still be constructed; any
    authenticated call then raises ``TokenMissingError`` until a token is
    obtained through :meth:`refresh_access_token`. Refreshing is always
    explicit: an expired token is reported by :meth:`is_expired` but never
    refreshed behind the caller's back.

    Example::

        client = FitbitClient(
            "client-id",
            "client-secret",
            token=stored_token,
            unit_system=ApiUnitSystem.METRIC,
        )
        if client.is_expired():
            save(client.refresh_access_token().as_serializable_dict())
        profile = client.get("/user/-/profile.json")
    """

    def __init__(
        self,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        *,
        token: Optional[TokenLike] = None,
        user_id: Optional[str] = None,
        unit_system: Optional[str] = None,
        locale: Optional[str] = None,
        session: Optional[requests.Session] = None,
        exchanger: Optional[TokenExchanger] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.credentials = Credentials.from_options(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
        )
        self.config = ClientConfig(
            user_id=user_id or DEFAULT_USER_ID,
            unit_system=unit_system or ApiUnitSystem.US,
            locale=locale or ApiLocale.US,
            timeout=timeout,
        )
        self._tokens = TokenManager(
            self.credentials,
            self.config,
            token=token,
            session=session,
            exchanger=exchanger,
        )

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "FitbitClient":
        """Build a client from ``FB_*`` variables; non-None overrides win."""
        options = load_options_from_env(environ)
        options.update(
            {key: value for key, value in overrides.items() if value is not None}
        )
        return cls(**options)

    @property
    def user_id(self) -> str:
        return self.config.user_id

    @user_id.setter
    def user_id(self, value: str) -> None:
        self.config.user_id = value

    @property
    def api_version(self) -> str:
        return self.config.api_version

    @api_version.setter
    def api_version(self, value: str) -> None:
        self.config.api_version = value

    @property
    def api_unit_system(self) -> str:
        return self.config.unit_system

    @api_unit_system.setter
    def api_unit_system(self, value: str) -> None:
        self.config.unit_system = value

    @property
    def api_locale(self) -> str:
        return self.config.locale

    @api_locale.setter
    def api_locale(self, value: str) -> None:
        self.config.locale = value

    @property
    def token(self) -> Optional[TokenData]:
        """The token currently in use, for callers that persist it."""
        return self._tokens.token

    def refresh_access_token(self, refresh_token: Optional[str] = None) -> TokenData:
        """Refresh the OAuth token and return it for the caller to persist."""
        return self._tokens.refresh(refresh_token)

    def is_expired(self) -> bool:
        return self._tokens.is_expired()

    def get(self, path: str, headers: Optional[Mapping[str, str]] = None) -> Any:
        return normalize_response(self.raw_get(path, headers))

    def raw_get(
        self, path: str, headers: Optional[Mapping[str, str]] = None
    ) -> requests.Response:
        return self.request("GET", path, headers=headers)

    def post(
        self,
        path: str,
        body: Optional[str] = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return normalize_response(self.raw_post(path, body, headers))

    def raw_post(
        self,
        path: str,
        body: Optional[str] = "",
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        return self.request("POST", path, body=body, headers=headers)

    def delete(self, path: str, headers: Optional[Mapping[str, str]] = None) -> Any:
        return normalize_response(self.raw_delete(path, headers))

    def raw_delete(
        self, path: str, headers: Optional[Mapping[str, str]] = None
    ) -> requests.Response:
        return self.request("DELETE", path, headers=headers)

    def request(
        self,
        method: str,
        path: str,
        *,
        body: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> requests.Response:
        """Perform an authorized request and return the raw response."""
        prepared = build_request(
            self.config, method, path, body=body, headers=headers
        )
        logger.debug("fitbit_request", method=prepared.method, path=prepared.path)
        response = self._tokens.request(prepared)
        logger.debug(
            "fitbit_response",
            method=prepared.method,
            path=prepared.path,
            status=response.status_code,
        )
        return response
