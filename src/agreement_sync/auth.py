"""
Bearer credentials for the agreement API.

Token acquisition (OAuth/PKCE) happens elsewhere; this module only loads a
credential that was already issued, checks its expiry, and hands out a valid
one. Providers may implement `refresh` when they can renew a token.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel

from agreement_sync.errors import AuthenticationMissing
from agreement_sync.normalization.parsers import as_utc

logger = logging.getLogger(__name__)

# Refresh when the token expires in less than this
REFRESH_MARGIN = timedelta(minutes=5)
# Lifetime assumed when a token response omits expires_in
DEFAULT_EXPIRES_IN = 28800


class Credential(BaseModel):
    """Bearer token with its absolute expiry."""

    access_token: str
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None

    @property
    def authorization_header(self) -> str:
        return f"{self.token_type or 'Bearer'} {self.access_token}"

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and as_utc(now) >= as_utc(self.expires_at)

    def expires_within(self, now: datetime, margin: timedelta = REFRESH_MARGIN) -> bool:
        return self.expires_at is not None and as_utc(self.expires_at) - as_utc(now) < margin

    @classmethod
    def from_token_response(cls, data: dict[str, Any], issued_at: datetime) -> "Credential":
        """Build from an OAuth token response ({access_token, expires_in, ...})."""
        try:
            expires_in = int(data.get("expires_in") or DEFAULT_EXPIRES_IN)
        except (TypeError, ValueError):
            expires_in = DEFAULT_EXPIRES_IN
        return cls(
            access_token=data["access_token"],
            token_type=data.get("token_type") or "Bearer",
            refresh_token=data.get("refresh_token"),
            expires_at=as_utc(issued_at) + timedelta(seconds=expires_in),
        )


class CredentialProvider(ABC):
    """Source of bearer credentials for a sync."""

    @abstractmethod
    def load(self) -> Optional[Credential]:
        """Return the stored credential, or None when there is none."""
        pass

    def refresh(self, credential: Credential) -> Optional[Credential]:
        """Renew a credential close to expiry. Default: no refresh capability."""
        return None

    def clear(self) -> None:
        """Forget stored credentials."""
        pass

    def get_valid_credential(self, now: datetime) -> Credential:
        """
        Credential that is present and unexpired at `now`, refreshing it first
        when it expires within REFRESH_MARGIN. Raises AuthenticationMissing otherwise.
        """
        credential = self.load()
        if credential is None or not credential.access_token:
            raise AuthenticationMissing("No valid authentication. Please login.")

        if credential.refresh_token and credential.expires_within(now):
            refreshed = self.refresh(credential)
            if refreshed is not None:
                logger.info("Refreshed access token (expires %s)", refreshed.expires_at)
                credential = refreshed
            else:
                logger.warning("Token refresh unavailable; using current token until expiry")

        if credential.is_expired(now):
            raise AuthenticationMissing(
                "Access token expired. Please login again.",
                {"expired_at": credential.expires_at.isoformat() if credential.expires_at else None},
            )
        return credential


class StaticCredentialProvider(CredentialProvider):
    """Holds one credential in memory; optional refresher callable."""

    def __init__(
        self,
        credential: Optional[Credential] = None,
        refresher: Optional[Callable[[Credential], Optional[Credential]]] = None,
    ):
        self._credential = credential
        self._refresher = refresher

    def load(self) -> Optional[Credential]:
        return self._credential

    def refresh(self, credential: Credential) -> Optional[Credential]:
        if self._refresher is None:
            return None
        refreshed = self._refresher(credential)
        if refreshed is not None:
            self._credential = refreshed
        return refreshed

    def clear(self) -> None:
        self._credential = None


class EnvCredentialProvider(CredentialProvider):
    """
    Reads NAVIGATOR_ACCESS_TOKEN, optional NAVIGATOR_TOKEN_EXPIRES_AT (ISO-8601)
    and NAVIGATOR_REFRESH_TOKEN.
    """

    def __init__(self, env: Optional[dict[str, str]] = None):
        self._env = os.environ if env is None else env

    def load(self) -> Optional[Credential]:
        token = (self._env.get("NAVIGATOR_ACCESS_TOKEN") or "").strip()
        if not token:
            return None
        expires_at = None
        raw_expiry = (self._env.get("NAVIGATOR_TOKEN_EXPIRES_AT") or "").strip()
        if raw_expiry:
            try:
                expires_at = datetime.fromisoformat(raw_expiry.replace("Z", "+00:00"))
            except ValueError:
                logger.warning("Ignoring unparseable NAVIGATOR_TOKEN_EXPIRES_AT=%r", raw_expiry)
        return Credential(
            access_token=token,
            refresh_token=(self._env.get("NAVIGATOR_REFRESH_TOKEN") or "").strip() or None,
            expires_at=expires_at,
        )


class TokenFileCredentialProvider(CredentialProvider):
    """
    Token JSON file as written after the OAuth handshake:
    {access_token, refresh_token, token_type, expires_in, stored_at}.
    stored_at is epoch milliseconds or an ISO-8601 timestamp.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def load(self) -> Optional[Credential]:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Could not read token file %s: %s", self._path, e)
            return None
        if not isinstance(data, dict) or not data.get("access_token"):
            logger.warning("Token file %s has no access_token", self._path)
            return None
        return Credential.from_token_response(data, self._stored_at(data.get("stored_at")))

    def save(self, credential: Credential, *, now: Optional[datetime] = None) -> None:
        """Write a credential back in token-file form."""
        now = as_utc(now or datetime.now(timezone.utc))
        expires_in = (
            int((as_utc(credential.expires_at) - now).total_seconds())
            if credential.expires_at
            else DEFAULT_EXPIRES_IN
        )
        payload = {
            "access_token": credential.access_token,
            "refresh_token": credential.refresh_token,
            "token_type": credential.token_type,
            "expires_in": expires_in,
            "stored_at": now.isoformat(),
        }
        self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)

    @staticmethod
    def _stored_at(value: Any) -> datetime:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        if isinstance(value, str) and value.strip():
            try:
                return as_utc(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
            except ValueError:
                logger.warning("Unparseable stored_at %r in token file", value)
        # Unknown issue time: treat the token as issued now
        return datetime.now(timezone.utc)
