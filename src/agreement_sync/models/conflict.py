"""Conflict records emitted by the pairwise exclusivity scan."""

from enum import Enum

from pydantic import BaseModel, Field

from agreement_sync.models.agreement import ExclusivityStatus

CONFLICT_TYPE = "Territory/Product Conflict"


class ConflictSeverity(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"


class AgreementRef(BaseModel):
    """Identity of one side of a conflict."""

    id: str
    title: str
    exclusivity: ExclusivityStatus


class ConflictRecord(BaseModel):
    """Two agreements claiming overlapping scope where at least one is exclusive."""

    type: str = CONFLICT_TYPE
    severity: ConflictSeverity
    agreement1: AgreementRef
    agreement2: AgreementRef
    overlapping_territories: list[str] = Field(..., min_length=1)
    overlapping_products: list[str] = Field(..., min_length=1)
