"""Unit tests for data models."""

from datetime import date

import pytest
from pydantic import ValidationError

from agreement_sync.models import (
    AgreementRef,
    CanonicalAgreement,
    ConflictRecord,
    ConflictSeverity,
    ExclusivityStatus,
    RawAgreement,
)


class TestRawAgreement:
    """Tests for RawAgreement."""

    def test_custom_fields_default_empty(self) -> None:
        assert RawAgreement(data={"id": "1"}).custom_fields == {}

    def test_custom_fields_non_mapping_ignored(self) -> None:
        assert RawAgreement(data={"customFields": "oops"}).custom_fields == {}

    def test_merged_with_detail_wins(self) -> None:
        """Detail values override list values; customFields merge key by key."""
        coarse = RawAgreement(data={"id": "1", "title": "List", "customFields": {"a": 1, "b": 2}})
        detail = RawAgreement(data={"title": "Detail", "customFields": {"b": 3}})
        merged = coarse.merged_with(detail)
        assert merged.data["id"] == "1"
        assert merged.data["title"] == "Detail"
        assert merged.custom_fields == {"a": 1, "b": 3}
        assert coarse.data["title"] == "List"


class TestCanonicalAgreement:
    """Tests for CanonicalAgreement."""

    def test_required_fields(self) -> None:
        with pytest.raises(ValidationError):
            CanonicalAgreement(id="x")

    def test_json_round_trip(self) -> None:
        """Dates and enums survive JSON serialization."""
        a = CanonicalAgreement(
            id="x",
            expiration_date=date(2026, 1, 1),
            exclusivity_status=ExclusivityStatus.EXCLUSIVE,
        )
        dumped = a.model_dump(mode="json")
        assert dumped["expiration_date"] == "2026-01-01"
        assert dumped["exclusivity_status"] == "Exclusive"
        assert CanonicalAgreement.model_validate(dumped) == a


class TestConflictRecord:
    """Tests for ConflictRecord."""

    def test_overlaps_must_be_non_empty(self) -> None:
        ref = AgreementRef(id="a", title="A", exclusivity=ExclusivityStatus.EXCLUSIVE)
        with pytest.raises(ValidationError):
            ConflictRecord(
                severity=ConflictSeverity.HIGH,
                agreement1=ref,
                agreement2=ref,
                overlapping_territories=[],
                overlapping_products=["MRI Systems"],
            )
