"""Unit tests for the sample connector and the connector registry."""

import pytest

from agreement_sync.config import SyncSettings
from agreement_sync.connectors import ConnectorRegistry
from agreement_sync.connectors.navigator import NavigatorConnector
from agreement_sync.connectors.sample import SAMPLE_AGREEMENTS, SampleConnector, sample_agreements


class TestSampleConnector:
    """Tests for SampleConnector."""

    def test_search_returns_demo_records(self) -> None:
        raw = SampleConnector().search()
        assert [r.data["id"] for r in raw] == ["AGR-001", "AGR-002", "AGR-003", "AGR-004", "AGR-005"]

    def test_search_query(self) -> None:
        raw = SampleConnector().search(query="japan")
        assert [r.data["id"] for r in raw] == ["AGR-003"]

    def test_fetch_details_by_id_or_navigator_id(self) -> None:
        connector = SampleConnector()
        assert connector.fetch_details("AGR-002").data["navigatorId"] == "nav_002"
        assert connector.fetch_details("nav_004").data["id"] == "AGR-004"

    def test_fetch_details_unknown(self) -> None:
        with pytest.raises(ValueError):
            SampleConnector().fetch_details("AGR-999")

    def test_copies_are_independent(self) -> None:
        """Mutating a returned record leaves the dataset intact."""
        first = sample_agreements()
        first[0].data["territoryCountries"].append("Mars")
        assert "Mars" not in SAMPLE_AGREEMENTS[0]["territoryCountries"]

    def test_fetch_all_normalizes(self, frozen_now) -> None:
        agreements = SampleConnector().fetch_all(frozen_now)
        assert len(agreements) == 5
        assert agreements[0].distributor_name == "MedizinTechnik Deutschland GmbH"


class TestConnectorRegistry:
    """Tests for ConnectorRegistry."""

    def test_available_sources(self) -> None:
        assert set(ConnectorRegistry.available_sources()) == {"navigator", "sample"}

    def test_get_passes_kwargs(self) -> None:
        connector = ConnectorRegistry.get("Navigator", base_url="https://example.com/api/")
        assert isinstance(connector, NavigatorConnector)
        assert connector.base_url == "https://example.com/api"

    def test_unknown_source(self) -> None:
        with pytest.raises(ValueError):
            ConnectorRegistry.get("sharepoint")

    def test_from_settings(self) -> None:
        """Navigator picks up the configured URL; other sources ignore settings."""
        settings = SyncSettings(navigator_url="http://localhost:9000/api/v1", request_timeout=5)
        connector = ConnectorRegistry.from_settings(settings)
        assert isinstance(connector, NavigatorConnector)
        assert connector.base_url == "http://localhost:9000/api/v1"
        assert isinstance(ConnectorRegistry.from_settings(settings, "sample"), SampleConnector)

    def test_register(self, monkeypatch) -> None:
        monkeypatch.setattr(ConnectorRegistry, "_connectors", dict(ConnectorRegistry._connectors))

        class ArchiveConnector(SampleConnector):
            source_id = "archive"

        ConnectorRegistry.register(ArchiveConnector)
        assert "archive" in ConnectorRegistry.available_sources()
        assert isinstance(ConnectorRegistry.get("archive"), ArchiveConnector)

    def test_register_requires_source_id(self) -> None:
        class Nameless(SampleConnector):
            source_id = ""

        with pytest.raises(ValueError):
            ConnectorRegistry.register(Nameless)
