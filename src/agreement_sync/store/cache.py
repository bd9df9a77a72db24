"""Sync cache record: agreements, conflicts and last-sync time, swapped as one unit."""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ValidationError

from agreement_sync.models.agreement import CanonicalAgreement
from agreement_sync.models.conflict import ConflictRecord

logger = logging.getLogger(__name__)

AGREEMENTS_KEY = "agreements"
CONFLICTS_KEY = "conflicts"
LAST_SYNC_KEY = "last_sync"


class SyncCache(BaseModel):
    """Result of one sync cycle. Replaced wholesale, never merged."""

    agreements: list[CanonicalAgreement] = Field(default_factory=list)
    conflicts: list[ConflictRecord] = Field(default_factory=list)
    last_sync: Optional[datetime] = None

    def to_records(self) -> dict[str, str]:
        """Three keyed values: JSON agreement list, JSON conflict list, ISO-8601 timestamp."""
        return {
            AGREEMENTS_KEY: json.dumps([a.model_dump(mode="json") for a in self.agreements]),
            CONFLICTS_KEY: json.dumps([c.model_dump(mode="json") for c in self.conflicts]),
            LAST_SYNC_KEY: self.last_sync.isoformat() if self.last_sync else "",
        }

    @classmethod
    def from_records(cls, records: dict[str, str]) -> Optional["SyncCache"]:
        """
        Rebuild from keyed values. None when no agreement set was ever stored
        or the stored values no longer decode.
        """
        if AGREEMENTS_KEY not in records:
            return None
        try:
            return cls.model_validate(
                {
                    "agreements": json.loads(records[AGREEMENTS_KEY]),
                    "conflicts": json.loads(records.get(CONFLICTS_KEY) or "[]"),
                    "last_sync": records.get(LAST_SYNC_KEY) or None,
                }
            )
        except (ValueError, ValidationError) as e:
            logger.warning("Cached sync record is unreadable: %s", e)
            return None


class CacheStore(ABC):
    """Persistence port for the sync cache record."""

    @abstractmethod
    def load(self) -> Optional[SyncCache]:
        """Last saved cache record, or None."""
        pass

    @abstractmethod
    def save(self, cache: SyncCache) -> None:
        """Replace the stored record with `cache`."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove the stored record."""
        pass


class InMemoryCacheStore(CacheStore):
    """Keeps the serialized record in a dict; for tests and one-shot runs."""

    def __init__(self, records: Optional[dict[str, str]] = None):
        self.records: dict[str, str] = dict(records or {})
        self.save_count = 0

    def load(self) -> Optional[SyncCache]:
        return SyncCache.from_records(self.records)

    def save(self, cache: SyncCache) -> None:
        self.records = cache.to_records()
        self.save_count += 1

    def clear(self) -> None:
        self.records = {}
