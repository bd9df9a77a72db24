"""Normalize raw Navigator agreement payloads into CanonicalAgreement."""

import hashlib
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from agreement_sync.errors import MalformedField
from agreement_sync.models.agreement import CanonicalAgreement, ExclusivityStatus
from agreement_sync.models.raw import RawAgreement

from .fields import resolve
from .parsers import (
    estimate_expiration,
    parse_annual_minimums,
    parse_date,
    parse_multi_value,
    parse_number,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Agreement"
DEFAULT_DISTRIBUTOR = "Unknown Distributor"
DEFAULT_STATUS = "Active"
DEFAULT_CURRENCY = "USD"
DEFAULT_PERFORMANCE_THRESHOLD = 85.0
DEFAULT_CURRENT_PERFORMANCE = 0.0
DEFAULT_NOTICE_DAYS = 90
# Notice periods beyond this are treated as malformed
MAX_NOTICE_DAYS = 36500

_EXCLUSIVITY_BY_NAME: dict[str, ExclusivityStatus] = {
    "exclusive": ExclusivityStatus.EXCLUSIVE,
    "conditional exclusive": ExclusivityStatus.CONDITIONAL_EXCLUSIVE,
    "conditionally exclusive": ExclusivityStatus.CONDITIONAL_EXCLUSIVE,
    "conditional": ExclusivityStatus.CONDITIONAL_EXCLUSIVE,
    "non-exclusive": ExclusivityStatus.NON_EXCLUSIVE,
    "non exclusive": ExclusivityStatus.NON_EXCLUSIVE,
    "nonexclusive": ExclusivityStatus.NON_EXCLUSIVE,
}


def _text(value: Any, default: str = "") -> str:
    """Scalar as stripped text; containers and blanks become the default."""
    if value is None or isinstance(value, (dict, list, tuple)):
        return default
    if isinstance(value, bool):
        return "Yes" if value else "No"
    try:
        text = str(value).strip()
    except ValueError:
        # Integers past the str conversion limit
        return default
    return text or default


def _number(field: str, raw: RawAgreement, default: Optional[float] = None) -> Optional[float]:
    number = parse_number(resolve(raw, field))
    return default if number is None else number


def _exclusivity(value: Any) -> ExclusivityStatus:
    if isinstance(value, ExclusivityStatus):
        return value
    key = " ".join(_text(value).replace("_", " ").split()).lower()
    if not key:
        return ExclusivityStatus.NON_EXCLUSIVE
    status = _EXCLUSIVITY_BY_NAME.get(key)
    if status is None:
        logger.debug("%s; treating as Non-Exclusive", MalformedField("exclusivityStatus", value))
        return ExclusivityStatus.NON_EXCLUSIVE
    return status


def _notice_days(raw: RawAgreement) -> int:
    days = parse_number(resolve(raw, "non_renewal_notice_days"))
    if days is None:
        return DEFAULT_NOTICE_DAYS
    if abs(days) > MAX_NOTICE_DAYS:
        logger.debug("%s; using default", MalformedField("nonRenewalNoticeDays", days))
        return DEFAULT_NOTICE_DAYS
    return int(days)


def _generated_id(raw: RawAgreement) -> str:
    """Deterministic ID for records without one, so re-syncs keep the same identity."""
    try:
        payload = json.dumps(raw.data, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return f"agr-{uuid.uuid4().hex[:12]}"
    return f"agr-{hashlib.sha256(payload.encode()).hexdigest()[:12]}"


def normalize_agreement(raw: RawAgreement, now: Optional[datetime] = None) -> CanonicalAgreement:
    """
    Convert a raw payload (flat or customFields-nested) to CanonicalAgreement.
    `now` only matters when the expiration date has to be estimated.
    Malformed fields fall back to their documented defaults; this never raises.
    """
    now = now or datetime.now(timezone.utc)

    agreement_id = _text(resolve(raw, "id")) or _generated_id(raw)
    effective_date = parse_date(resolve(raw, "effective_date"))
    term_length = _text(resolve(raw, "initial_term_length"))

    expiration_date = parse_date(resolve(raw, "expiration_date"))
    expiration_estimated = expiration_date is None
    if expiration_estimated:
        expiration_date = estimate_expiration(effective_date, term_length, now)
        logger.debug("Agreement %s has no expiration date; estimated %s", agreement_id, expiration_date)

    return CanonicalAgreement(
        id=agreement_id,
        source_id=_text(resolve(raw, "source_id")) or None,
        source_url=_text(resolve(raw, "source_url")) or None,
        title=_text(resolve(raw, "title"), DEFAULT_TITLE),
        execution_date=parse_date(resolve(raw, "execution_date")),
        effective_date=effective_date,
        expiration_date=expiration_date,
        expiration_estimated=expiration_estimated,
        status=_text(resolve(raw, "status"), DEFAULT_STATUS),
        distributor_name=_text(resolve(raw, "distributor_name"), DEFAULT_DISTRIBUTOR),
        business_line=_text(resolve(raw, "business_line")),
        initial_term_length=term_length,
        departments_impacted=_text(resolve(raw, "departments_impacted")),
        territories=parse_multi_value(resolve(raw, "territories")),
        product_categories=parse_multi_value(resolve(raw, "product_categories")),
        customer_segment_restrictions=_text(resolve(raw, "customer_segment_restrictions")),
        exclusivity_status=_exclusivity(resolve(raw, "exclusivity_status")),
        performance_based_exclusivity=_text(resolve(raw, "performance_based_exclusivity"), "No"),
        exclusivity_conversion_trigger=_text(resolve(raw, "exclusivity_conversion_trigger")),
        currency=_text(resolve(raw, "currency"), DEFAULT_CURRENCY),
        discount_mri_ct=_number("discount_mri_ct", raw),
        discount_ultrasound=_number("discount_ultrasound", raw),
        discount_patient_monitoring=_number("discount_patient_monitoring", raw),
        discount_ai_software=_number("discount_ai_software", raw),
        software_revenue_share=_number("software_revenue_share", raw),
        price_cap_increase_percent=_number("price_cap_increase_percent", raw),
        annual_minimums=parse_annual_minimums(resolve(raw, "annual_minimums")),
        minimum_performance_threshold=_number(
            "minimum_performance_threshold", raw, DEFAULT_PERFORMANCE_THRESHOLD
        ),
        current_performance=_number("current_performance", raw, DEFAULT_CURRENT_PERFORMANCE),
        non_renewal_notice_days=_notice_days(raw),
    )
