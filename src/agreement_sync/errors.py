"""
Exception hierarchy for the agreement sync pipeline.

Only AuthenticationMissing and unclassified errors surface to sync callers;
the upstream and field errors are recovered where they are raised.
"""

from typing import Any


class AgreementSyncError(Exception):
    """Base exception for all agreement sync errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class AuthenticationMissing(AgreementSyncError):
    """No usable bearer credential; fatal to the current sync."""

    pass


class UpstreamFetchFailed(AgreementSyncError):
    """Agreement list request failed (network error or API error response)."""

    pass


class UpstreamDetailFetchFailed(AgreementSyncError):
    """Per-agreement detail request failed."""

    def __init__(self, agreement_id: str, message: str, context: dict[str, Any] | None = None):
        super().__init__(message, {"agreement_id": agreement_id, **(context or {})})
        self.agreement_id = agreement_id


class MalformedField(AgreementSyncError):
    """A source field did not parse as its expected type."""

    def __init__(self, field: str, value: Any, message: str | None = None):
        super().__init__(
            message or f"Malformed value for field '{field}'",
            {"field": field, "value": repr(value)[:200]},
        )
        self.field = field
        self.value = value


class ConfigurationError(AgreementSyncError):
    """Settings file or environment value is invalid."""

    pass
