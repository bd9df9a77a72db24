"""Derived renewal fields and point-based risk tiers."""

from .derived import classify_urgency, current_year_commitment, days_until, enrich_agreement
from .risk import RiskAssessment, assess_risk, score_risk, tier_for_points

__all__ = [
    "RiskAssessment",
    "assess_risk",
    "classify_urgency",
    "current_year_commitment",
    "days_until",
    "enrich_agreement",
    "score_risk",
    "tier_for_points",
]
