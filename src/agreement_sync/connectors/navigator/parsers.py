"""Parsers for Navigator API JSON responses."""

from typing import Any

from agreement_sync.models.raw import RawAgreement

from .constants import DETAIL_KEY, LIST_KEYS


def agreements_from_payload(payload: Any) -> list[RawAgreement]:
    """
    Raw agreements from a list response.
    Accepts {"agreements": [...]}, alternate list keys, or a bare list; non-object items are skipped.
    """
    items: Any = []
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        for key in LIST_KEYS:
            if isinstance(payload.get(key), list):
                items = payload[key]
                break
    return [RawAgreement(data=item) for item in items if isinstance(item, dict)]


def agreement_from_detail_payload(payload: Any) -> RawAgreement | None:
    """Raw agreement from a detail response; None when the body is not an object."""
    if not isinstance(payload, dict):
        return None
    inner = payload.get(DETAIL_KEY)
    if isinstance(inner, dict):
        return RawAgreement(data=inner)
    return RawAgreement(data=payload)
