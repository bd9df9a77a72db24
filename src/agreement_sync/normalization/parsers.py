"""Value parsers for raw agreement fields. None of these raise on bad input."""

import json
import logging
import math
import re
from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError

from agreement_sync.errors import MalformedField
from agreement_sync.models.agreement import AnnualMinimum

logger = logging.getLogger(__name__)

DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d",
    "%Y/%m/%d",
)
# Multi-value delimiters when the value is not a JSON array
MULTI_VALUE_SEP = re.compile(r"[,;|]")
# Leading numeric prefix, e.g. "85%" -> 85, "3.5 pct" -> 3.5
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^[+-]?\d+")


def _report(error: MalformedField) -> None:
    logger.debug("%s; using default", error)


def _decode_json(text: str) -> tuple[bool, Any]:
    """Returns (ok, decoded)."""
    try:
        return True, json.loads(text)
    except (ValueError, RecursionError):
        return False, None


def as_utc(moment: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to already be UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def parse_multi_value(value: Any) -> list[str]:
    """
    Parse a multi-value field (territories, products).
    Sequences pass through; strings are tried as a JSON array, then split on , ; |.
    """
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None]
    if not isinstance(value, str):
        return []
    text = value.strip()
    if not text:
        return []
    ok, decoded = _decode_json(text)
    if not ok:
        return [t.strip() for t in MULTI_VALUE_SEP.split(text) if t.strip()]
    if isinstance(decoded, list):
        return [str(v) for v in decoded if v is not None]
    if isinstance(decoded, str):
        return [decoded] if decoded.strip() else []
    return [text]


def parse_number(value: Any) -> Optional[float]:
    """Float or None. Empty, null, and non-numeric input are None, never 0."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            _report(MalformedField("number", value))
            return None
    elif isinstance(value, str):
        m = _NUMBER_PREFIX.match(value.strip())
        if not m:
            if value.strip():
                _report(MalformedField("number", value))
            return None
        number = float(m.group(0))
    else:
        _report(MalformedField("number", value))
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_annual_minimums(value: Any) -> list[AnnualMinimum]:
    """
    Parse annual minimum commitments.
    Accepts a sequence or a JSON string decoding to a sequence; no delimiter fallback.
    Entries that are not {year, amount} objects are dropped.
    """
    if isinstance(value, str):
        ok, decoded = _decode_json(value.strip())
        if not ok:
            if value.strip():
                _report(MalformedField("annualMinimums", value))
            return []
        value = decoded
    if not isinstance(value, (list, tuple)):
        return []

    minimums: list[AnnualMinimum] = []
    for item in value:
        if isinstance(item, AnnualMinimum):
            minimums.append(item)
            continue
        try:
            minimums.append(AnnualMinimum.model_validate(item))
        except ValidationError:
            _report(MalformedField("annualMinimums", item, "Dropping malformed annual minimum entry"))
    return minimums


def parse_date(value: Any) -> Optional[date]:
    """Calendar date from date/datetime objects or ISO-like strings."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text[:19], fmt).date()
        except ValueError:
            continue
    _report(MalformedField("date", value))
    return None


def parse_term_years(term: Any) -> int:
    """Leading integer of a term length ("3 years" -> 3); 1 when absent, unparseable or not positive."""
    if isinstance(term, bool):
        return 1
    if isinstance(term, (int, float)) and not (isinstance(term, float) and not math.isfinite(term)):
        years = int(term)
    elif isinstance(term, str):
        m = _INT_PREFIX.match(term.strip())
        try:
            years = int(m.group(0)) if m else 0
        except ValueError:
            # Digit strings past the int conversion limit
            years = 0
    else:
        years = 0
    return years if years > 0 else 1


def add_years(start: date, years: int) -> date:
    """Same month/day `years` later; Feb 29 becomes Feb 28 in non-leap years."""
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        return start.replace(year=start.year + years, day=28)


def estimate_expiration(effective: Optional[date], term_length: Any, now: datetime) -> date:
    """
    Heuristic expiration for records without one: effective date plus the term in
    years when both are known, otherwise one year from `now`.
    """
    if effective is not None and term_length not in (None, ""):
        try:
            return add_years(effective, parse_term_years(term_length))
        except (ValueError, OverflowError):
            logger.debug("Term length %r overflows calendar; using one year from now", term_length)
    return add_years(as_utc(now).date(), 1)
