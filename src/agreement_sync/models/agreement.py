"""Canonical agreement model and its enumerations."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ExclusivityStatus(str, Enum):
    EXCLUSIVE = "Exclusive"
    CONDITIONAL_EXCLUSIVE = "Conditional Exclusive"
    NON_EXCLUSIVE = "Non-Exclusive"


class RenewalUrgency(str, Enum):
    URGENT = "Urgent"
    WARNING = "Warning"
    ON_TRACK = "On Track"


class RiskTier(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class AnnualMinimum(BaseModel):
    """Minimum purchase commitment for one contract year."""

    year: int
    amount: float


class CanonicalAgreement(BaseModel):
    """Canonical agreement record produced by the normalizer for every source shape."""

    id: str = Field(..., description="Stable agreement ID; generated when the source has none")
    source_id: Optional[str] = Field(default=None, description="Native Navigator record ID")
    source_url: Optional[str] = None
    title: str = "Untitled Agreement"

    execution_date: Optional[date] = None
    effective_date: Optional[date] = None
    expiration_date: date
    expiration_estimated: bool = Field(
        default=False,
        description="True when expiration_date is a heuristic estimate, not a sourced value",
    )
    status: str = "Active"

    distributor_name: str = "Unknown Distributor"
    business_line: str = ""
    initial_term_length: str = ""
    departments_impacted: str = ""

    territories: list[str] = Field(default_factory=list)
    product_categories: list[str] = Field(default_factory=list)
    customer_segment_restrictions: str = ""

    exclusivity_status: ExclusivityStatus = ExclusivityStatus.NON_EXCLUSIVE
    performance_based_exclusivity: str = "No"
    exclusivity_conversion_trigger: str = ""

    currency: str = "USD"
    discount_mri_ct: Optional[float] = None
    discount_ultrasound: Optional[float] = None
    discount_patient_monitoring: Optional[float] = None
    discount_ai_software: Optional[float] = None
    software_revenue_share: Optional[float] = None
    price_cap_increase_percent: Optional[float] = None
    annual_minimums: list[AnnualMinimum] = Field(default_factory=list)

    minimum_performance_threshold: float = 85.0
    current_performance: float = 0.0

    non_renewal_notice_days: int = 90

    # Derived by scoring.derived.enrich_agreement; never read from input.
    non_renewal_deadline: Optional[date] = None
    days_until_expiration: Optional[int] = None
    days_until_deadline: Optional[int] = None
    renewal_urgency: Optional[RenewalUrgency] = None
    current_year_commitment: float = 0.0
    risk_tier: Optional[RiskTier] = None
    synced_at: Optional[datetime] = None

    @property
    def is_enriched(self) -> bool:
        return (
            self.non_renewal_deadline is not None
            and self.renewal_urgency is not None
            and self.risk_tier is not None
        )
