"""Pytest fixtures for agreement-sync tests."""

import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import pytest

from agreement_sync.connectors.base import BaseConnector
from agreement_sync.errors import UpstreamDetailFetchFailed, UpstreamFetchFailed
from agreement_sync.models.raw import RawAgreement

# Reference time for the demo dataset golden values
FROZEN_NOW = datetime(2025, 1, 15, tzinfo=timezone.utc)


class FakeConnector(BaseConnector):
    """In-memory connector recording the calls made against it."""

    source_id = "fake"

    def __init__(
        self,
        records: Optional[list[dict]] = None,
        details: Optional[dict[str, dict]] = None,
        fail_search: bool = False,
        failing_details: Optional[set[str]] = None,
    ):
        self.records = records or []
        self.details = details or {}
        self.fail_search = fail_search
        self.failing_details = failing_details or set()
        self.credential = None
        self.detail_calls: list[str] = []

    def authenticate(self, credential) -> None:
        self.credential = credential

    def search(self, query=None, filters=None) -> list[RawAgreement]:
        if self.fail_search:
            raise UpstreamFetchFailed("Navigator API error: 503", {"status_code": 503})
        return [RawAgreement(data=dict(r)) for r in self.records]

    def fetch_details(self, raw_id: str) -> RawAgreement:
        self.detail_calls.append(raw_id)
        if raw_id in self.failing_details:
            raise UpstreamDetailFetchFailed(raw_id, "Navigator API error: 500")
        return RawAgreement(data=dict(self.details.get(raw_id, {})))


@pytest.fixture
def frozen_now() -> datetime:
    return FROZEN_NOW


@pytest.fixture
def fake_connector_cls() -> type[FakeConnector]:
    """FakeConnector class, for tests that build or subclass their own."""
    return FakeConnector


@pytest.fixture
def temp_db() -> Path:
    """Temporary database path for isolated tests."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    path.unlink(missing_ok=True)


@pytest.fixture
def flat_payload() -> dict:
    """Flat-shape agreement payload as returned by the agreement list."""
    return {
        "id": "nav-100",
        "title": "Nordics - Imaging",
        "effectiveDate": "2024-01-01",
        "expirationDate": "2026-12-31",
        "distributorLegalName": "Nordic Med AB",
        "territoryCountries": ["Sweden", "Norway"],
        "productCategories": ["MRI Systems"],
        "exclusivityStatus": "Exclusive",
        "minimumPerformanceThreshold": 85,
        "currentPerformance": 91,
        "nonRenewalNoticeDays": 90,
        "annualMinimums": [{"year": 2025, "amount": 1000000}],
    }


@pytest.fixture
def nested_payload() -> dict:
    """customFields-nested agreement payload with string-encoded values."""
    return {
        "id": "nav-200",
        "name": "navigator-document-name.pdf",
        "status": "Active",
        "createdDate": "2023-05-02T09:30:00Z",
        "customFields": {
            "agreementTitle": "Iberia - Ultrasound",
            "effectiveDate": "2023-06-01",
            "expirationDate": "2025-05-31",
            "distributorName": "Iberica Medica SL",
            "territoryCountries": '["Spain", "Portugal"]',
            "productCategories": "Ultrasound Systems; AI Software",
            "exclusivityStatus": "conditional exclusive",
            "currentPerformance": "82%",
            "nonRenewalNoticeDays": "60",
            "annualMinimums": '[{"year": 2025, "amount": 750000}]',
        },
    }
