"""Abstract base class for agreement source connectors."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from agreement_sync.auth import Credential
from agreement_sync.models.agreement import CanonicalAgreement
from agreement_sync.models.raw import RawAgreement
from agreement_sync.normalization import normalize_agreement


class BaseConnector(ABC):
    """
    Standard interface for agreement sources.
    All connectors implement list/search and per-record detail fetch.
    """

    source_id: str = ""

    def authenticate(self, credential: Credential) -> None:
        """Attach a bearer credential for subsequent requests. Default: not needed."""
        pass

    @abstractmethod
    def search(self, query: Optional[str] = None, filters: Optional[dict] = None) -> list[RawAgreement]:
        """
        List agreements; returns raw payloads from the source.
        """
        pass

    @abstractmethod
    def fetch_details(self, raw_id: str) -> RawAgreement:
        """
        Fetch the full record for one agreement by its source-native ID.
        """
        pass

    def normalize(self, raw: RawAgreement, now: Optional[datetime] = None) -> CanonicalAgreement:
        """
        Convert raw record to CanonicalAgreement.
        Override for sources whose payloads need pre-processing first.
        """
        return normalize_agreement(raw, now)

    def fetch_all(self, now: Optional[datetime] = None) -> list[CanonicalAgreement]:
        """
        Fetch all agreements and return the normalized list (not enriched).
        """
        return [self.normalize(r, now) for r in self.search()]
