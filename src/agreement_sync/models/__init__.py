"""Data models for raw and canonical agreements and conflict records."""

from agreement_sync.models.agreement import (
    AnnualMinimum,
    CanonicalAgreement,
    ExclusivityStatus,
    RenewalUrgency,
    RiskTier,
)
from agreement_sync.models.conflict import AgreementRef, ConflictRecord, ConflictSeverity
from agreement_sync.models.raw import RawAgreement

__all__ = [
    "AgreementRef",
    "AnnualMinimum",
    "CanonicalAgreement",
    "ConflictRecord",
    "ConflictSeverity",
    "ExclusivityStatus",
    "RawAgreement",
    "RenewalUrgency",
    "RiskTier",
]
