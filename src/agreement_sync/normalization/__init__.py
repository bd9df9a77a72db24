"""Field normalization from heterogeneous Navigator payloads to CanonicalAgreement."""

from .normalizer import normalize_agreement
from .parsers import (
    estimate_expiration,
    parse_annual_minimums,
    parse_date,
    parse_multi_value,
    parse_number,
    parse_term_years,
)

__all__ = [
    "estimate_expiration",
    "normalize_agreement",
    "parse_annual_minimums",
    "parse_date",
    "parse_multi_value",
    "parse_number",
    "parse_term_years",
]
