"""Offline connector over the demo dataset."""

from typing import Optional

from agreement_sync.connectors.base import BaseConnector
from agreement_sync.models.raw import RawAgreement

from .data import sample_agreements


class SampleConnector(BaseConnector):
    """Serves the fixed demo agreements; no network, no credential needed."""

    source_id = "sample"

    def search(self, query: Optional[str] = None, filters: Optional[dict] = None) -> list[RawAgreement]:
        raw_list = sample_agreements()
        if query:
            q = query.lower()
            raw_list = [r for r in raw_list if q in str(r.data.get("title") or "").lower()]
        return raw_list

    def fetch_details(self, raw_id: str) -> RawAgreement:
        for r in sample_agreements():
            if raw_id.strip() in (r.data.get("id"), r.data.get("navigatorId")):
                return r
        raise ValueError(f"Agreement not found: {raw_id}")
