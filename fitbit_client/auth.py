"""Fitbit OAuth2 endpoints and token exchange."""

from __future__ import annotations

from typing import Optional, Protocol

import requests
import structlog
from requests_oauth2client import ClientSecretBasic, OAuth2Client

from .tokens import TokenData

__all__ = [
    "FITBIT_AUTHORIZATION_ENDPOINT",
    "FITBIT_TOKEN_ENDPOINT",
    "OAuth2TokenExchanger",
    "TokenExchanger",
    "create_fitbit_client",
]

logger = structlog.get_logger(__name__)

# FitBit OAuth2 endpoints
FITBIT_AUTHORIZATION_ENDPOINT = "https://www.fitbit.com/oauth2/authorize"
FITBIT_TOKEN_ENDPOINT = "https://api.fitbit.com/oauth2/token"


class TokenExchanger(Protocol):
    """Anything able to trade a refresh token for a new token."""

    def refresh(self, refresh_token: str) -> TokenData:
        ...


def create_fitbit_client(
    client_id: str,
    client_secret: str,
    *,
    session: Optional[requests.Session] = None,
) -> OAuth2Client:
    """Create an OAuth2 client configured for the Fitbit token endpoint.

    Client credentials are sent with HTTP Basic auth, i.e. an
    ``Authorization: Basic base64(client_id:client_secret)`` header.

    Args:
        client_id: The Fitbit application client ID (consumer key).
        client_secret: The Fitbit application client secret.
        session: Optional requests session used for the token calls.

    Returns:
        A configured OAuth2Client instance.
    """
    logger.debug(
        "creating_oauth2_client",
        authorization_endpoint=FITBIT_AUTHORIZATION_ENDPOINT,
        token_endpoint=FITBIT_TOKEN_ENDPOINT,
    )
    return OAuth2Client(
        token_endpoint=FITBIT_TOKEN_ENDPOINT,
        authorization_endpoint=FITBIT_AUTHORIZATION_ENDPOINT,
        auth=ClientSecretBasic(client_id, client_secret),
        session=session or requests.Session(),
    )


class OAuth2TokenExchanger:
    """Token exchanger backed by the real Fitbit token endpoint."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.oauth2_client = create_fitbit_client(
            client_id, client_secret, session=session
        )

    def refresh(self, refresh_token: str) -> TokenData:
        """Exchange ``refresh_token`` for a new token.

        Errors returned by the token endpoint surface as the exceptions raised
        by ``requests_oauth2client``; network errors as ``requests`` errors.
        """
        bearer = self.oauth2_client.refresh_token(refresh_token)
        return TokenData.from_bearer_token(bearer)
