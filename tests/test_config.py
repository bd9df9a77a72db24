"""Unit tests for SyncSettings loading."""

from pathlib import Path

import pytest

from agreement_sync.config import DEFAULT_NAVIGATOR_URL, SyncSettings
from agreement_sync.errors import ConfigurationError


class TestSyncSettingsFromYaml:
    """Tests for SyncSettings.from_yaml."""

    def test_nested_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(
            "navigator:\n"
            "  url: https://navigator.example.com/api/v1\n"
            "  timeout: 10\n"
            "sync:\n"
            "  db: sync.db\n"
            "  fetch_details: true\n"
            "  request_delay: 0.5\n"
        )
        settings = SyncSettings.from_yaml(path, env={})
        assert settings.navigator_url == "https://navigator.example.com/api/v1"
        assert settings.request_timeout == 10.0
        assert settings.db_path == Path("sync.db")
        assert settings.fetch_details is True
        assert settings.request_delay_seconds == 0.5

    def test_flat_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("db_path: flat.db\ntoken_file: token.json\n")
        settings = SyncSettings.from_yaml(path, env={})
        assert settings.db_path == Path("flat.db")
        assert settings.token_file == Path("token.json")
        assert settings.navigator_url == DEFAULT_NAVIGATOR_URL

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("sync:\n  db: file.db\n")
        settings = SyncSettings.from_yaml(path, env={"AGREEMENT_SYNC_DB": "env.db"})
        assert settings.db_path == Path("env.db")

    def test_invalid_value_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("sync:\n  request_delay: -1\n")
        with pytest.raises(ConfigurationError):
            SyncSettings.from_yaml(path, env={})

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            SyncSettings.from_yaml(tmp_path / "absent.yaml", env={})

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            SyncSettings.from_yaml(path, env={})


class TestSyncSettingsFromEnv:
    """Tests for SyncSettings.from_env."""

    def test_defaults(self) -> None:
        settings = SyncSettings.from_env({})
        assert settings.db_path == Path("agreement_sync.db")
        assert settings.fetch_details is False
        assert settings.request_delay_seconds == 1.0

    def test_env_values(self) -> None:
        settings = SyncSettings.from_env(
            {
                "AGREEMENT_SYNC_FETCH_DETAILS": "true",
                "AGREEMENT_SYNC_REQUEST_DELAY": "2.5",
                "AGREEMENT_SYNC_NAVIGATOR_URL": "http://localhost:9000",
            }
        )
        assert settings.fetch_details is True
        assert settings.request_delay_seconds == 2.5
        assert settings.navigator_url == "http://localhost:9000"

    def test_bad_env_value_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            SyncSettings.from_env({"AGREEMENT_SYNC_REQUEST_DELAY": "soon"})
