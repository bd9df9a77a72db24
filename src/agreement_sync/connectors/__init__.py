"""Source connectors for agreement ingestion."""

from agreement_sync.connectors.base import BaseConnector
from agreement_sync.connectors.registry import ConnectorRegistry

__all__ = ["BaseConnector", "ConnectorRegistry"]
