"""Risk rules: each returns (points, explanation, rule_id); points add up to a tier."""

from typing import Callable

from pydantic import BaseModel, Field

from agreement_sync.models.agreement import CanonicalAgreement, ExclusivityStatus, RiskTier

# Deadline windows, shared with renewal urgency: (0, 30] and (0, 90]
URGENT_WINDOW_DAYS = 30
WARNING_WINDOW_DAYS = 90

PERFORMANCE_MARGIN = 5
CONDITIONAL_EXCLUSIVITY_FLOOR = 90

HIGH_RISK_POINTS = 5
MEDIUM_RISK_POINTS = 2


class RiskAssessment(BaseModel):
    """Risk tier with the point total and per-rule explanation trail."""

    tier: RiskTier
    points: int
    explanations: list[str] = Field(default_factory=list)
    fired_rules: list[str] = Field(default_factory=list)


RiskRuleFn = Callable[[CanonicalAgreement], tuple[int, str, str]]


def apply_performance_rule(agreement: CanonicalAgreement) -> tuple[int, str, str]:
    """Below threshold: +3. Within PERFORMANCE_MARGIN above it: +1."""
    current = agreement.current_performance
    threshold = agreement.minimum_performance_threshold
    if current < threshold:
        return 3, f"Performance {current:g} below threshold {threshold:g}", "performance"
    if current < threshold + PERFORMANCE_MARGIN:
        return 1, f"Performance {current:g} within {PERFORMANCE_MARGIN} of threshold {threshold:g}", "performance"
    return 0, f"Performance {current:g} clear of threshold {threshold:g}", "performance"


def apply_deadline_rule(agreement: CanonicalAgreement) -> tuple[int, str, str]:
    """
    Non-renewal deadline in (0, 30] days: +3; in (0, 90]: +1.
    A deadline that has already passed scores nothing.
    """
    days = agreement.days_until_deadline
    if days is None:
        return 0, "Deadline not computed", "deadline"
    if 0 < days <= URGENT_WINDOW_DAYS:
        return 3, f"Non-renewal deadline in {days} days", "deadline"
    if 0 < days <= WARNING_WINDOW_DAYS:
        return 1, f"Non-renewal deadline in {days} days", "deadline"
    return 0, f"Non-renewal deadline outside warning window ({days} days)", "deadline"


def apply_conditional_exclusivity_rule(agreement: CanonicalAgreement) -> tuple[int, str, str]:
    """Conditional exclusivity held at performance under 90: +2."""
    if (
        agreement.exclusivity_status == ExclusivityStatus.CONDITIONAL_EXCLUSIVE
        and agreement.current_performance < CONDITIONAL_EXCLUSIVITY_FLOOR
    ):
        return (
            2,
            f"Conditional exclusivity at performance {agreement.current_performance:g} "
            f"(< {CONDITIONAL_EXCLUSIVITY_FLOOR})",
            "conditional_exclusivity",
        )
    return 0, "No conditional exclusivity exposure", "conditional_exclusivity"


RISK_RULES: list[RiskRuleFn] = [
    apply_performance_rule,
    apply_deadline_rule,
    apply_conditional_exclusivity_rule,
]


def tier_for_points(points: int) -> RiskTier:
    if points >= HIGH_RISK_POINTS:
        return RiskTier.HIGH
    if points >= MEDIUM_RISK_POINTS:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def assess_risk(agreement: CanonicalAgreement) -> RiskAssessment:
    """Apply every rule once and return the tier with its explanation trail."""
    points = 0
    explanations: list[str] = []
    fired: list[str] = []
    for rule_fn in RISK_RULES:
        rule_points, explanation, rule_id = rule_fn(agreement)
        explanations.append(explanation)
        if rule_points:
            points += rule_points
            fired.append(rule_id)
    return RiskAssessment(
        tier=tier_for_points(points),
        points=points,
        explanations=explanations,
        fired_rules=fired,
    )


def score_risk(agreement: CanonicalAgreement) -> RiskTier:
    """Risk tier from already-derived fields."""
    return assess_risk(agreement).tier
