"""Unit tests for territory/product conflict detection."""

from datetime import date

from agreement_sync.conflicts import check_pair, detect_conflicts
from agreement_sync.models.agreement import CanonicalAgreement, ExclusivityStatus
from agreement_sync.models.conflict import CONFLICT_TYPE, ConflictSeverity


def _agreement(agreement_id: str, territories, products, exclusivity=ExclusivityStatus.EXCLUSIVE) -> CanonicalAgreement:
    return CanonicalAgreement(
        id=agreement_id,
        title=f"Agreement {agreement_id}",
        expiration_date=date(2027, 1, 1),
        territories=territories,
        product_categories=products,
        exclusivity_status=exclusivity,
    )


class TestCheckPair:
    """Tests for check_pair."""

    def test_both_exclusive_is_high(self) -> None:
        a = _agreement("a", ["Germany", "Austria"], ["MRI Systems", "CT Scanners"])
        b = _agreement("b", ["Austria", "Switzerland"], ["CT Scanners"])
        conflict = check_pair(a, b)
        assert conflict is not None
        assert conflict.type == CONFLICT_TYPE
        assert conflict.severity == ConflictSeverity.HIGH
        assert conflict.overlapping_territories == ["Austria"]
        assert conflict.overlapping_products == ["CT Scanners"]
        assert conflict.agreement1.id == "a"
        assert conflict.agreement2.id == "b"

    def test_one_exclusive_is_medium(self) -> None:
        a = _agreement("a", ["Japan"], ["AI Software"])
        b = _agreement("b", ["Japan"], ["AI Software"], ExclusivityStatus.NON_EXCLUSIVE)
        conflict = check_pair(a, b)
        assert conflict is not None
        assert conflict.severity == ConflictSeverity.MEDIUM
        assert conflict.agreement2.exclusivity == ExclusivityStatus.NON_EXCLUSIVE

    def test_conditional_alone_does_not_conflict(self) -> None:
        """Conditional exclusivity does not count as Exclusive."""
        a = _agreement("a", ["Japan"], ["AI Software"], ExclusivityStatus.CONDITIONAL_EXCLUSIVE)
        b = _agreement("b", ["Japan"], ["AI Software"], ExclusivityStatus.NON_EXCLUSIVE)
        assert check_pair(a, b) is None

    def test_territory_overlap_only(self) -> None:
        a = _agreement("a", ["Japan"], ["MRI Systems"])
        b = _agreement("b", ["Japan"], ["Ultrasound Systems"])
        assert check_pair(a, b) is None

    def test_product_overlap_only(self) -> None:
        a = _agreement("a", ["Japan"], ["MRI Systems"])
        b = _agreement("b", ["Brazil"], ["MRI Systems"])
        assert check_pair(a, b) is None

    def test_overlap_keeps_first_agreement_order(self) -> None:
        a = _agreement("a", ["Spain", "France", "Italy"], ["MRI Systems"])
        b = _agreement("b", ["Italy", "Spain"], ["MRI Systems"])
        assert check_pair(a, b).overlapping_territories == ["Spain", "Italy"]

    def test_matching_is_exact(self) -> None:
        """Territory names are compared case-sensitively."""
        a = _agreement("a", ["germany"], ["MRI Systems"])
        b = _agreement("b", ["Germany"], ["MRI Systems"])
        assert check_pair(a, b) is None


class TestDetectConflicts:
    """Tests for detect_conflicts."""

    def test_pair_order(self) -> None:
        """Each unordered pair once, in (i, j) generation order."""
        a = _agreement("a", ["Japan"], ["MRI Systems"])
        b = _agreement("b", ["Japan"], ["MRI Systems"])
        c = _agreement("c", ["Japan"], ["MRI Systems"])
        conflicts = detect_conflicts([a, b, c])
        pairs = [(x.agreement1.id, x.agreement2.id) for x in conflicts]
        assert pairs == [("a", "b"), ("a", "c"), ("b", "c")]

    def test_no_agreements(self) -> None:
        assert detect_conflicts([]) == []
        assert detect_conflicts([_agreement("a", ["Japan"], ["MRI Systems"])]) == []

    def test_inputs_not_mutated(self) -> None:
        a = _agreement("a", ["Japan"], ["MRI Systems"])
        b = _agreement("b", ["Japan"], ["MRI Systems"])
        before = (a.model_dump(), b.model_dump())
        detect_conflicts([a, b])
        assert (a.model_dump(), b.model_dump()) == before
