"""Derived renewal fields: non-renewal deadline, countdowns, urgency, current-year commitment."""

import math
from datetime import date, datetime, time, timedelta, timezone

from agreement_sync.models.agreement import AnnualMinimum, CanonicalAgreement, RenewalUrgency
from agreement_sync.normalization.parsers import as_utc

from .risk import URGENT_WINDOW_DAYS, WARNING_WINDOW_DAYS, score_risk

SECONDS_PER_DAY = 86400


def shift_days(start: date, days: int) -> date:
    """Calendar shift, clamped to the representable date range."""
    try:
        return start + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def days_until(target: date, now: datetime) -> int:
    """Whole days from `now` to midnight UTC of `target`, rounded up. Negative once passed."""
    delta = datetime.combine(target, time.min, tzinfo=timezone.utc) - as_utc(now)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def classify_urgency(days_until_deadline: int) -> RenewalUrgency:
    """
    (0, 30] Urgent, (0, 90] Warning, anything else On Track.
    A deadline that has already passed is On Track, not escalated.
    """
    if 0 < days_until_deadline <= URGENT_WINDOW_DAYS:
        return RenewalUrgency.URGENT
    if 0 < days_until_deadline <= WARNING_WINDOW_DAYS:
        return RenewalUrgency.WARNING
    return RenewalUrgency.ON_TRACK


def current_year_commitment(minimums: list[AnnualMinimum], year: int) -> float:
    """Amount of the first entry for `year`; 0 when there is none."""
    for minimum in minimums:
        if minimum.year == year:
            return minimum.amount
    return 0.0


def enrich_agreement(agreement: CanonicalAgreement, now: datetime) -> CanonicalAgreement:
    """Return a copy with derived renewal fields, risk tier and synced_at populated."""
    now = as_utc(now)
    deadline = shift_days(agreement.expiration_date, -agreement.non_renewal_notice_days)
    days_to_deadline = days_until(deadline, now)

    enriched = agreement.model_copy(
        update={
            "non_renewal_deadline": deadline,
            "days_until_expiration": days_until(agreement.expiration_date, now),
            "days_until_deadline": days_to_deadline,
            "renewal_urgency": classify_urgency(days_to_deadline),
            "current_year_commitment": current_year_commitment(agreement.annual_minimums, now.year),
            "synced_at": now,
        }
    )
    enriched.risk_tier = score_risk(enriched)
    return enriched
