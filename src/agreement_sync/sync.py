"""Sync orchestration: authenticate → fetch → (details) → process → cache."""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel

from agreement_sync.auth import CredentialProvider
from agreement_sync.conflicts import detect_conflicts
from agreement_sync.connectors.base import BaseConnector
from agreement_sync.connectors.sample import sample_agreements
from agreement_sync.errors import UpstreamDetailFetchFailed, UpstreamFetchFailed
from agreement_sync.models.agreement import CanonicalAgreement
from agreement_sync.models.conflict import ConflictRecord
from agreement_sync.models.raw import RawAgreement
from agreement_sync.normalization import normalize_agreement
from agreement_sync.normalization.parsers import as_utc
from agreement_sync.scoring import enrich_agreement
from agreement_sync.store.cache import CacheStore, SyncCache

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_DELAY = 1.0


class SyncStage(str, Enum):
    AUTHENTICATING = "authenticating"
    FETCHING = "fetching"
    PROCESSING = "processing"
    CACHING = "caching"
    COMPLETE = "complete"
    ERROR = "error"


STAGE_PROGRESS: dict[SyncStage, int] = {
    SyncStage.AUTHENTICATING: 0,
    SyncStage.FETCHING: 20,
    SyncStage.PROCESSING: 60,
    SyncStage.CACHING: 80,
    SyncStage.COMPLETE: 100,
    SyncStage.ERROR: 0,
}


@dataclass
class SyncProgress:
    """One progress notification."""

    stage: SyncStage
    progress: int
    message: str = ""


class ProgressObserver:
    """Receives stage transitions. Default: ignore them."""

    def on_progress(self, progress: SyncProgress) -> None:
        pass


class CallbackObserver(ProgressObserver):
    """Adapts a plain callable to the observer interface."""

    def __init__(self, callback: Callable[[SyncProgress], None]):
        self._callback = callback

    def on_progress(self, progress: SyncProgress) -> None:
        self._callback(progress)


class DelayPolicy:
    """Pause between consecutive detail requests."""

    def wait(self) -> None:
        pass


class NoDelay(DelayPolicy):
    pass


class FixedDelay(DelayPolicy):
    def __init__(self, seconds: float = DEFAULT_REQUEST_DELAY, sleep: Callable[[float], None] = time.sleep):
        self.seconds = seconds
        self._sleep = sleep

    def wait(self) -> None:
        if self.seconds > 0:
            self._sleep(self.seconds)


class SyncResult(BaseModel):
    """Outcome of one sync cycle."""

    success: bool
    count: int = 0
    conflict_count: int = 0
    elapsed_seconds: float = 0.0
    last_sync_time: Optional[datetime] = None
    using_sample_data: bool = False
    error: Optional[str] = None
    using_cache: bool = False


def process_agreements(
    raw_list: list[RawAgreement], now: datetime
) -> tuple[list[CanonicalAgreement], list[ConflictRecord]]:
    """Normalize, enrich and conflict-check a batch of raw payloads at `now`."""
    agreements = [enrich_agreement(normalize_agreement(raw, now), now) for raw in raw_list]
    return agreements, detect_conflicts(agreements)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SyncOrchestrator:
    """
    Runs one sync cycle against a connector and keeps the latest result in memory.
    Not re-entrant: callers must not start a sync while another is running.
    """

    def __init__(
        self,
        connector: BaseConnector,
        credentials: CredentialProvider,
        store: CacheStore,
        *,
        fetch_details: bool = False,
        delay_policy: Optional[DelayPolicy] = None,
        clock: Optional[Callable[[], datetime]] = None,
        sample_loader: Callable[[], list[RawAgreement]] = sample_agreements,
    ):
        self.connector = connector
        self.credentials = credentials
        self.store = store
        self.fetch_details = fetch_details
        self.delay_policy = delay_policy or FixedDelay()
        self._clock = clock or _utcnow
        self._sample_loader = sample_loader
        self._cache = SyncCache()

    def sync(self, observer: Optional[ProgressObserver] = None) -> SyncResult:
        observer = observer or ProgressObserver()
        started = time.monotonic()
        try:
            self._notify(observer, SyncStage.AUTHENTICATING, "Checking credentials")
            now = as_utc(self._clock())
            credential = self.credentials.get_valid_credential(now)
            self.connector.authenticate(credential)

            self._notify(observer, SyncStage.FETCHING, "Fetching agreements")
            raw_list, using_sample = self._fetch_raw()
            if self.fetch_details and not using_sample:
                raw_list = self._with_details(raw_list)

            self._notify(observer, SyncStage.PROCESSING, f"Processing {len(raw_list)} agreements")
            agreements, conflicts = process_agreements(raw_list, now)

            self._notify(observer, SyncStage.CACHING, "Caching results")
            cache = SyncCache(agreements=agreements, conflicts=conflicts, last_sync=now)
            self.store.save(cache)
            self._cache = cache

            self._notify(observer, SyncStage.COMPLETE, f"Synced {len(agreements)} agreements")
            return SyncResult(
                success=True,
                count=len(agreements),
                conflict_count=len(conflicts),
                elapsed_seconds=time.monotonic() - started,
                last_sync_time=now,
                using_sample_data=using_sample,
            )
        except Exception as e:
            logger.error("Sync failed: %s", e)
            self._notify(observer, SyncStage.ERROR, str(e))
            return SyncResult(
                success=False,
                elapsed_seconds=time.monotonic() - started,
                error=str(e),
                using_cache=self.load_from_cache(),
                last_sync_time=self._cache.last_sync,
            )

    def _notify(self, observer: ProgressObserver, stage: SyncStage, message: str) -> None:
        logger.info("Sync stage %s: %s", stage.value, message)
        observer.on_progress(SyncProgress(stage=stage, progress=STAGE_PROGRESS[stage], message=message))

    def _fetch_raw(self) -> tuple[list[RawAgreement], bool]:
        """Upstream list, or the demo dataset when the list is unavailable or empty."""
        try:
            raw_list = self.connector.search()
        except UpstreamFetchFailed as e:
            logger.warning("Agreement fetch failed, using sample data: %s", e)
            return self._sample_loader(), True
        if not raw_list:
            logger.warning("No agreements returned, using sample data")
            return self._sample_loader(), True
        return raw_list, False

    def _with_details(self, raw_list: list[RawAgreement]) -> list[RawAgreement]:
        """One detail request per agreement, in order, pausing between requests."""
        detailed: list[RawAgreement] = []
        for i, raw in enumerate(raw_list):
            raw_id = raw.data.get("id")
            if not raw_id:
                detailed.append(raw)
                continue
            if i > 0:
                self.delay_policy.wait()
            try:
                detailed.append(raw.merged_with(self.connector.fetch_details(str(raw_id))))
            except UpstreamDetailFetchFailed as e:
                logger.warning("Keeping list record for %s: %s", raw_id, e)
                detailed.append(raw)
        return detailed

    def load_from_cache(self) -> bool:
        """Replace the in-memory record with the stored one. False when nothing usable is stored."""
        try:
            cached = self.store.load()
        except Exception as e:
            logger.warning("Could not load cached sync record: %s", e)
            return False
        if cached is None:
            return False
        self._cache = cached
        logger.info("Loaded %d agreements from cache", len(cached.agreements))
        return True

    def cached_agreements(self) -> list[CanonicalAgreement]:
        return list(self._cache.agreements)

    def cached_conflicts(self) -> list[ConflictRecord]:
        return list(self._cache.conflicts)

    def last_sync_time(self) -> Optional[datetime]:
        return self._cache.last_sync

    def disconnect(self) -> None:
        """Forget credentials and every cached result."""
        self.credentials.clear()
        self.store.clear()
        self._cache = SyncCache()
