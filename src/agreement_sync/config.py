"""Sync settings loaded from YAML and environment variables."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from agreement_sync.errors import ConfigurationError

DEFAULT_NAVIGATOR_URL = "https://navigator-d.docusign.com/api/v1"

_ENV_OVERRIDES: dict[str, str] = {
    "AGREEMENT_SYNC_NAVIGATOR_URL": "navigator_url",
    "AGREEMENT_SYNC_DB": "db_path",
    "AGREEMENT_SYNC_TOKEN_FILE": "token_file",
    "AGREEMENT_SYNC_FETCH_DETAILS": "fetch_details",
    "AGREEMENT_SYNC_REQUEST_DELAY": "request_delay_seconds",
}


class SyncSettings(BaseModel):
    """Settings for the Navigator connector, cache store, and sync loop."""

    navigator_url: str = DEFAULT_NAVIGATOR_URL
    db_path: Path = Path("agreement_sync.db")
    token_file: Optional[Path] = None
    fetch_details: bool = Field(
        default=False,
        description="Issue one detail request per agreement after the list fetch",
    )
    request_delay_seconds: float = Field(default=1.0, ge=0)
    request_timeout: float = Field(default=30.0, gt=0)

    @classmethod
    def from_yaml(cls, path: str | Path, *, env: Optional[dict[str, str]] = None) -> "SyncSettings":
        """Load settings from YAML. Supports nested (navigator/sync) or flat structure."""
        try:
            data = yaml.safe_load(Path(path).read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not read settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {path} must contain a mapping")

        navigator = data.get("navigator") or {}
        sync = data.get("sync") or {}

        def _get(key: str, nested: dict, alias: Optional[str] = None):
            if key in nested:
                return nested[key]
            if alias and alias in nested:
                return nested[alias]
            return data.get(key)

        flat: dict[str, Any] = {
            "navigator_url": _get("navigator_url", navigator, "url"),
            "request_timeout": _get("request_timeout", navigator, "timeout"),
            "db_path": _get("db_path", sync, "db"),
            "token_file": _get("token_file", sync),
            "fetch_details": _get("fetch_details", sync),
            "request_delay_seconds": _get("request_delay_seconds", sync, "request_delay"),
        }
        return cls._build({k: v for k, v in flat.items() if v is not None}, env)

    @classmethod
    def from_env(cls, env: Optional[dict[str, str]] = None) -> "SyncSettings":
        """Defaults overridden by AGREEMENT_SYNC_* environment variables."""
        return cls._build({}, env)

    @classmethod
    def _build(cls, values: dict[str, Any], env: Optional[dict[str, str]]) -> "SyncSettings":
        env = os.environ if env is None else env
        for var, key in _ENV_OVERRIDES.items():
            value = env.get(var)
            if value is not None and value.strip():
                values[key] = value.strip()
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid sync settings: {e}") from e
