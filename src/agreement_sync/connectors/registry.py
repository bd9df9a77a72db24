"""Connector lookup by source name, optionally configured from SyncSettings."""

from typing import Optional, Type

from agreement_sync.config import SyncSettings
from agreement_sync.connectors.base import BaseConnector
from agreement_sync.connectors.navigator import NavigatorConnector
from agreement_sync.connectors.sample import SampleConnector


class ConnectorRegistry:
    """Maps source names to agreement connector classes."""

    _connectors: dict[str, Type[BaseConnector]] = {
        NavigatorConnector.source_id: NavigatorConnector,
        SampleConnector.source_id: SampleConnector,
    }

    @classmethod
    def register(cls, connector_cls: Type[BaseConnector]) -> None:
        """Add a connector under its source_id, replacing any existing entry."""
        if not connector_cls.source_id:
            raise ValueError(f"{connector_cls.__name__} has no source_id")
        cls._connectors[connector_cls.source_id] = connector_cls

    @classmethod
    def get(cls, source_id: str, **kwargs) -> BaseConnector:
        """Instantiate the connector for `source_id`; kwargs go to its constructor."""
        connector_cls = cls._connectors.get(source_id.strip().lower())
        if connector_cls is None:
            raise ValueError(f"Unknown source: {source_id}. Available: {cls.available_sources()}")
        return connector_cls(**kwargs)

    @classmethod
    def from_settings(cls, settings: SyncSettings, source_id: Optional[str] = None) -> BaseConnector:
        """Connector wired with the configured endpoint and timeout (Navigator only takes them)."""
        source_id = source_id or NavigatorConnector.source_id
        if cls._connectors.get(source_id) is NavigatorConnector:
            return cls.get(source_id, base_url=settings.navigator_url, timeout=settings.request_timeout)
        return cls.get(source_id)

    @classmethod
    def available_sources(cls) -> list[str]:
        return sorted(cls._connectors)
