"""OAuth2 session handles and token lifecycle management."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional

import requests
import structlog

from .auth import OAuth2TokenExchanger, TokenExchanger
from .config import ClientConfig, Credentials
from .exceptions import TokenMissingError
from .request_builder import PreparedRequest
from .tokens import TokenData, TokenLike, coerce_token

logger = structlog.get_logger(__name__)


class SessionHandle:
    """Request-capable handle bound to a single access token."""

    def __init__(
        self,
        token: TokenData,
        *,
        session: requests.Session,
        base_url: str,
        timeout: Optional[float] = None,
    ) -> None:
        self.token = token
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def request(self, prepared: PreparedRequest) -> requests.Response:
        """Send ``prepared`` with a bearer Authorization header."""
        headers = dict(prepared.headers)
        headers["Authorization"] = f"Bearer {self.token.access_token}"
        return self.session.request(
            prepared.method,
            f"{self.base_url}{prepared.path}",
            data=prepared.body,
            headers=headers,
            timeout=self.timeout,
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.token.is_expired(now=now)


class TokenManager:
    """Owns the current token and the session handle derived from it.

    The handle is built on first use and dropped on every refresh. A single
    re-entrant lock guards the token/handle pair so that only one refresh is
    in flight and no request runs on a handle invalidated mid-flight.
    """

    def __init__(
        self,
        credentials: Credentials,
        config: ClientConfig,
        *,
        token: Optional[TokenLike] = None,
        session: Optional[requests.Session] = None,
        exchanger: Optional[TokenExchanger] = None,
    ) -> None:
        self.credentials = credentials
        self.config = config
        self.session = session or requests.Session()
        self.exchanger: TokenExchanger = exchanger or OAuth2TokenExchanger(
            credentials.consumer_key,
            credentials.consumer_secret,
            session=self.session,
        )
        self._lock = threading.RLock()
        self._token: Optional[TokenData] = coerce_token(token)
        self._session_handle: Optional[SessionHandle] = None

    @property
    def token(self) -> Optional[TokenData]:
        return self._token

    def get_session(self) -> SessionHandle:
        """Return the memoized session handle, building it if needed."""
        with self._lock:
            if self._session_handle is None:
                if self._token is None:
                    raise TokenMissingError(
                        "No access token is available; supply one or refresh first."
                    )
                self._session_handle = SessionHandle(
                    self._token,
                    session=self.session,
                    base_url=self.config.base_url,
                    timeout=self.config.timeout,
                )
                logger.debug(
                    "session_created",
                    token=_token_preview(self._token.access_token),
                )
            return self._session_handle

    def is_expired(self) -> bool:
        """Return True when the held access token has expired."""
        return self.get_session().is_expired()

    def refresh(self, refresh_token: Optional[str] = None) -> TokenData:
        """Exchange a refresh token for a new token and adopt it.

        When ``refresh_token`` is omitted the held token's refresh token is
        used. The new token is returned so the caller can persist it.
        """
        with self._lock:
            if refresh_token is None and self._token is not None:
                refresh_token = self._token.refresh_token
            if not refresh_token:
                raise TokenMissingError("Refresh token is missing.")

            new_token = self.exchanger.refresh(refresh_token)
            self._token = new_token
            self._session_handle = None
            expires_at = new_token.expires_at
            logger.info(
                "token_refreshed",
                token=_token_preview(new_token.access_token),
                expires_at=expires_at.isoformat() if expires_at else None,
            )
            return new_token

    def request(self, prepared: PreparedRequest) -> requests.Response:
        """Send ``prepared`` through the current session handle."""
        with self._lock:
            handle = self.get_session()
            return handle.request(prepared)


def _token_preview(value: str) -> str:
    return value[:8] + "..."
