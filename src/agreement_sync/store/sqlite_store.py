"""SQLite-backed sync cache with run history."""

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from agreement_sync.store.cache import CacheStore, SyncCache


class RunRecord:
    """Record of one sync run."""

    def __init__(
        self,
        id: int,
        source: str,
        started_at: datetime,
        finished_at: Optional[datetime],
        status: str,
        agreements_synced: int,
        conflicts_found: int,
        used_sample_data: bool,
        error_message: Optional[str] = None,
    ):
        self.id = id
        self.source = source
        self.started_at = started_at
        self.finished_at = finished_at
        self.status = status
        self.agreements_synced = agreements_synced
        self.conflicts_found = conflicts_found
        self.used_sample_data = used_sample_data
        self.error_message = error_message


class SqliteCacheStore(CacheStore):
    """
    SQLite store for the sync cache record.
    The three keyed values are written in one transaction, so readers never see a mixed set.
    """

    def __init__(self, db_path: str | Path = "agreement_sync.db"):
        self._db_path = Path(db_path)
        self._ensure_schema()

    def _connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        schema_path = Path(__file__).parent / "schema.sql"
        with self._connection() as conn:
            conn.executescript(schema_path.read_text())

    def load(self) -> Optional[SyncCache]:
        with self._connection() as conn:
            rows = conn.execute("SELECT key, value FROM sync_cache").fetchall()
        return SyncCache.from_records({row["key"]: row["value"] for row in rows})

    def save(self, cache: SyncCache) -> None:
        now = datetime.now(timezone.utc).isoformat()
        records = cache.to_records()
        with self._connection() as conn:
            conn.execute("DELETE FROM sync_cache")
            conn.executemany(
                "INSERT INTO sync_cache (key, value, updated_at) VALUES (?, ?, ?)",
                [(key, value, now) for key, value in records.items()],
            )
            conn.commit()

    def clear(self) -> None:
        with self._connection() as conn:
            conn.execute("DELETE FROM sync_cache")
            conn.commit()

    def start_run(self, source: str) -> RunRecord:
        """Record start of a sync run. Returns RunRecord with id."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO sync_runs (source, started_at, status) VALUES (?, ?, 'running')",
                (source, now),
            )
            conn.commit()
            run_id = cursor.lastrowid
        return RunRecord(
            id=run_id or 0,
            source=source,
            started_at=datetime.fromisoformat(now),
            finished_at=None,
            status="running",
            agreements_synced=0,
            conflicts_found=0,
            used_sample_data=False,
        )

    def finish_run(
        self,
        run_id: int,
        agreements_synced: int,
        conflicts_found: int,
        *,
        used_sample_data: bool = False,
        status: str = "completed",
        error_message: Optional[str] = None,
    ) -> None:
        """Record completion of a sync run."""
        now = datetime.now(timezone.utc).isoformat()
        with self._connection() as conn:
            conn.execute(
                """
                UPDATE sync_runs SET finished_at = ?, status = ?, agreements_synced = ?,
                    conflicts_found = ?, used_sample_data = ?, error_message = ?
                WHERE id = ?
                """,
                (
                    now,
                    status,
                    agreements_synced,
                    conflicts_found,
                    int(used_sample_data),
                    error_message,
                    run_id,
                ),
            )
            conn.commit()

    def list_runs(self, limit: int = 20) -> list[RunRecord]:
        """Most recent runs first."""
        with self._connection() as conn:
            rows = conn.execute(
                "SELECT * FROM sync_runs ORDER BY id DESC LIMIT ?", (limit,)
            ).fetchall()
        return [self._row_to_run(r) for r in rows]

    def _row_to_run(self, row: sqlite3.Row) -> RunRecord:
        return RunRecord(
            id=row["id"],
            source=row["source"],
            started_at=datetime.fromisoformat(row["started_at"]),
            finished_at=datetime.fromisoformat(row["finished_at"]) if row["finished_at"] else None,
            status=row["status"],
            agreements_synced=row["agreements_synced"],
            conflicts_found=row["conflicts_found"],
            used_sample_data=bool(row["used_sample_data"]),
            error_message=row["error_message"],
        )
