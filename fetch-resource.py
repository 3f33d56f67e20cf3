#!/usr/bin/env python3
"""Fetch a single Fitbit API resource using a stored OAuth token."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

import requests
import structlog
from requests_oauth2client import OAuth2Error

from fitbit_client import FitbitAPIError, FitbitClient, TokenData

structlog.configure(
    processors=[
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(),
    ]
)
logger = structlog.get_logger(__name__)


def _default_token_file() -> str:
    return os.environ.get("FB_TOKENS_FILE") or "tokens.json"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="GET a Fitbit API resource and print the JSON body."
    )
    parser.add_argument(
        "--token-file",
        default=_default_token_file(),
        help="Path to the OAuth tokens file (default: %(default)s).",
    )
    parser.add_argument(
        "--path",
        default="/user/-/profile.json",
        help="Resource path without the API version prefix (default: %(default)s).",
    )
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Refresh the access token first and write it back to --token-file.",
    )
    parser.add_argument(
        "--unit-system",
        default=None,
        help="Accept-Language value, e.g. en_US, en_GB or METRIC.",
    )
    parser.add_argument(
        "--locale",
        default=None,
        help="Accept-Locale value, e.g. en_US or ja_JP.",
    )
    return parser.parse_args(argv)


def load_token(path: Path) -> TokenData:
    with path.expanduser().open("r", encoding="utf-8") as handle:
        return TokenData.from_dict(json.load(handle))


def save_token(token: TokenData, path: Path) -> None:
    token_path = path.expanduser()
    token_path.parent.mkdir(parents=True, exist_ok=True)
    with token_path.open("w", encoding="utf-8") as handle:
        json.dump(token.as_serializable_dict(), handle, indent=2)
        handle.write("\n")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    token_file = Path(args.token_file)
    if not token_file.expanduser().exists():
        logger.error("token_file_missing", path=str(token_file))
        sys.exit(1)

    logger.info("loading_tokens", path=str(token_file))
    try:
        token = load_token(token_file)
    except (ValueError, KeyError) as exc:
        logger.error("token_file_invalid", path=str(token_file), error=str(exc))
        sys.exit(1)

    try:
        client = FitbitClient.from_env(
            token=token,
            unit_system=args.unit_system,
            locale=args.locale,
        )
        if args.refresh or client.is_expired():
            save_token(client.refresh_access_token(), token_file)
            logger.info("token_saved", path=str(token_file))
        body = client.get(args.path)
    except (FitbitAPIError, OAuth2Error) as exc:
        logger.error("fitbit_api_error", error=str(exc))
        sys.exit(1)
    except requests.RequestException as exc:
        logger.error("fitbit_request_failed", error=str(exc))
        sys.exit(1)

    print(json.dumps(body, indent=2))


if __name__ == "__main__":
    main()
