"""Pairwise territory/product exclusivity conflict detection."""

from typing import Sequence

from agreement_sync.models.agreement import CanonicalAgreement, ExclusivityStatus
from agreement_sync.models.conflict import AgreementRef, ConflictRecord, ConflictSeverity


def _overlap(left: list[str], right: list[str]) -> list[str]:
    """Values of `left` also present in `right`, in `left` order."""
    right_set = set(right)
    return [v for v in left if v in right_set]


def _ref(agreement: CanonicalAgreement) -> AgreementRef:
    return AgreementRef(
        id=agreement.id,
        title=agreement.title,
        exclusivity=agreement.exclusivity_status,
    )


def check_pair(a: CanonicalAgreement, b: CanonicalAgreement) -> ConflictRecord | None:
    """
    Conflict for one pair: shared territory AND shared product AND at least one
    side Exclusive. High when both are Exclusive, Medium otherwise.
    """
    territories = _overlap(a.territories, b.territories)
    if not territories:
        return None
    products = _overlap(a.product_categories, b.product_categories)
    if not products:
        return None

    a_exclusive = a.exclusivity_status == ExclusivityStatus.EXCLUSIVE
    b_exclusive = b.exclusivity_status == ExclusivityStatus.EXCLUSIVE
    if not (a_exclusive or b_exclusive):
        return None

    return ConflictRecord(
        severity=ConflictSeverity.HIGH if a_exclusive and b_exclusive else ConflictSeverity.MEDIUM,
        agreement1=_ref(a),
        agreement2=_ref(b),
        overlapping_territories=territories,
        overlapping_products=products,
    )


def detect_conflicts(agreements: Sequence[CanonicalAgreement]) -> list[ConflictRecord]:
    """Scan every unordered pair (i < j) once; results follow pair order."""
    conflicts: list[ConflictRecord] = []
    for i in range(len(agreements)):
        for j in range(i + 1, len(agreements)):
            conflict = check_pair(agreements[i], agreements[j])
            if conflict is not None:
                conflicts.append(conflict)
    return conflicts
