"""
Ordered candidate accessors for each canonical field.

Resolution walks a field's accessors left to right and keeps the first non-empty
value. For every key name, the customFields map is consulted before the
top-level payload; synonym key names come after the primary one.
"""

from typing import Any, Callable

from agreement_sync.models.raw import RawAgreement

Accessor = Callable[[RawAgreement], Any]


def custom(key: str) -> Accessor:
    """Value of `key` in the customFields map."""

    def _get(raw: RawAgreement) -> Any:
        return raw.custom_fields.get(key)

    _get.__qualname__ = f"customFields.{key}"
    return _get


def top(key: str) -> Accessor:
    """Value of `key` on the payload itself."""

    def _get(raw: RawAgreement) -> Any:
        return raw.data.get(key)

    _get.__qualname__ = key
    return _get


def keys(*names: str) -> list[Accessor]:
    """customFields then top-level, for each name in order."""
    accessors: list[Accessor] = []
    for name in names:
        accessors.extend([custom(name), top(name)])
    return accessors


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def first_present(raw: RawAgreement, accessors: list[Accessor]) -> Any:
    """First non-empty candidate, or None."""
    for accessor in accessors:
        value = accessor(raw)
        if not is_empty(value):
            return value
    return None


FIELD_SOURCES: dict[str, list[Accessor]] = {
    "id": [top("id"), top("agreementId")],
    "source_id": [top("navigatorId"), top("id")],
    "source_url": [top("navigatorUrl"), top("documentUrl"), top("viewUrl"), top("url")],
    "title": keys("agreementTitle", "title") + [top("name")],
    "execution_date": keys("executionDate") + [top("createdDate")],
    "effective_date": keys("effectiveDate") + [top("executionDate")],
    "expiration_date": keys("expirationDate"),
    "status": [top("status"), custom("status")],
    "distributor_name": keys("distributorLegalName", "distributorName"),
    "business_line": keys("lineOfBusiness", "businessLine"),
    "initial_term_length": keys("initialTermLength", "termLength"),
    "departments_impacted": keys("departmentsImpacted", "departments"),
    "territories": keys("territoryCountries", "territories", "territory"),
    "product_categories": keys("productCategories", "products", "product"),
    "customer_segment_restrictions": keys("customerSegmentRestrictions", "customerSegments"),
    "exclusivity_status": keys("exclusivityStatus", "exclusivity"),
    "performance_based_exclusivity": keys("performanceBasedExclusivity"),
    "exclusivity_conversion_trigger": keys("exclusivityConversionTrigger"),
    "currency": keys("commitmentCurrency", "currency"),
    "discount_mri_ct": keys("discountMRI_CT", "discount-mri-ct"),
    "discount_ultrasound": keys("discountUltrasound", "discount-ultrasound"),
    "discount_patient_monitoring": keys("discountPatientMonitoring", "discount-patient-monitoring"),
    "discount_ai_software": keys("discountAISoftware", "discount-ai-software"),
    "software_revenue_share": keys("softwareRevenueShare", "softwareShare"),
    "price_cap_increase_percent": keys("priceCapIncrease", "priceCap"),
    "annual_minimums": keys("annualMinimums", "minimums"),
    "minimum_performance_threshold": keys("minimumPerformanceThreshold", "performanceThreshold"),
    "current_performance": keys("currentPerformance", "performance"),
    "non_renewal_notice_days": keys("nonRenewalNoticeDays", "noticeDays"),
}


def resolve(raw: RawAgreement, field: str) -> Any:
    """Resolve one canonical field from its candidate list."""
    return first_present(raw, FIELD_SOURCES[field])
