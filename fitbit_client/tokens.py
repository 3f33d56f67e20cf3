"""In-memory representation of Fitbit OAuth2 tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Union

if TYPE_CHECKING:
    from requests_oauth2client import BearerToken

UTC = timezone.utc


@dataclass
class TokenData:
    """Access/refresh token pair with optional expiry."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    scope: Optional[List[str]] = None
    token_type: Optional[str] = None
    raw: Dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TokenData":
        """Create a TokenData from a token endpoint or stored JSON payload.

        An absolute ``expires_at`` wins over a relative ``expires_in``.
        """
        expires_at_value = payload.get("expires_at")
        expires_in = payload.get("expires_in")
        if isinstance(expires_at_value, datetime):
            expires_at: Optional[datetime] = _as_utc(expires_at_value)
        elif expires_at_value:
            expires_at = _parse_timestamp(str(expires_at_value))
        elif expires_in:
            expires_at = datetime.now(tz=UTC) + timedelta(seconds=int(expires_in))
        else:
            expires_at = None

        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_at=expires_at,
            scope=_normalize_scope(payload.get("scope")),
            token_type=payload.get("token_type"),
            raw=dict(payload),
        )

    @classmethod
    def from_bearer_token(cls, token: "BearerToken") -> "TokenData":
        """Create a TokenData from a ``requests_oauth2client`` BearerToken."""
        expires_at = getattr(token, "expires_at", None)
        return cls(
            access_token=token.access_token,
            refresh_token=getattr(token, "refresh_token", None),
            expires_at=_as_utc(expires_at) if expires_at else None,
            scope=_normalize_scope(getattr(token, "scope", None)),
            token_type=getattr(token, "token_type", None),
            raw=dict(getattr(token, "kwargs", None) or {}),
        )

    def as_serializable_dict(self) -> Dict[str, Any]:
        """Return a JSON serializable representation of the token."""
        data: Dict[str, Any] = {
            "access_token": self.access_token,
            "token_type": self.token_type,
        }
        if self.refresh_token:
            data["refresh_token"] = self.refresh_token
        if self.expires_at:
            data["expires_at"] = self.expires_at.astimezone(UTC).isoformat()
        if self.scope:
            data["scope"] = " ".join(self.scope)
        if self.raw:
            for key, value in self.raw.items():
                # expires_in is relative to when the token was issued.
                if key not in data and key != "expires_in":
                    data[key] = value
        return data

    def is_expired(
        self,
        now: Optional[datetime] = None,
        leeway: timedelta = timedelta(0),
    ) -> bool:
        """Return True when the token expired at or before ``now + leeway``.

        A token without an expiry never expires.
        """
        if not self.expires_at:
            return False
        current = _as_utc(now) if now else datetime.now(tz=UTC)
        return self.expires_at <= current + leeway


TokenLike = Union[TokenData, Mapping[str, Any], str]


def coerce_token(value: Optional[TokenLike]) -> Optional[TokenData]:
    """Normalize a bare access token string or mapping into TokenData."""
    if value is None or isinstance(value, TokenData):
        return value
    if isinstance(value, str):
        return TokenData(access_token=value) if value else None
    if isinstance(value, Mapping):
        return TokenData.from_dict(value)
    raise TypeError(f"Unsupported token value: {type(value).__name__}")


def _normalize_scope(scope_value: Any) -> Optional[List[str]]:
    if isinstance(scope_value, str):
        return [scope.strip() for scope in scope_value.split() if scope.strip()]
    if isinstance(scope_value, Iterable):
        return [str(item) for item in scope_value]
    return None


def _as_utc(value: datetime) -> datetime:
    if not value.tzinfo:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _parse_timestamp(value: str) -> datetime:
    return _as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
