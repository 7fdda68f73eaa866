"""In-memory trade store — the caller-owned accumulated trade set."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any

import structlog

from dual_tracker.engine.normalizer import normalize_batches, unwrap_batch
from dual_tracker.errors import ValidationError
from dual_tracker.models.trade import Trade
from dual_tracker.models.upload import UploadEntry

log = structlog.get_logger("trade_store")


class TradeStore:
    """Accumulates normalized trades across uploads, first occurrence wins.

    Readers get an immutable tuple snapshot; the engine never sees the
    store itself.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._trades: tuple[Trade, ...] = ()
        self._uploads: list[UploadEntry] = []
        self._next_upload_id = 1

    def add_batch(self, payload: Any) -> tuple[UploadEntry, list[ValidationError]]:
        """Merge one raw batch into the store.

        Raises:
            ValidationError: the batch wrapper itself is malformed
                (kind MalformedBatch); the store is left untouched.
        """
        records = unwrap_batch(payload)
        with self._lock:
            result = normalize_batches([records], existing=self._trades)
            self._trades = self._trades + tuple(result.trades)
            entry = UploadEntry(
                id=self._next_upload_id,
                timestamp=datetime.now(timezone.utc),
                record_count=len(records),
                accepted=len(result.trades),
                duplicates=result.duplicates,
                rejected=result.rejected,
            )
            self._next_upload_id += 1
            self._uploads.insert(0, entry)

        log.info(
            "batch_stored",
            upload_id=entry.id,
            records=entry.record_count,
            accepted=entry.accepted,
            duplicates=entry.duplicates,
            rejected=entry.rejected,
            total_trades=len(self._trades),
        )
        return entry, result.errors

    def trades(self) -> tuple[Trade, ...]:
        return self._trades

    def uploads(self) -> list[UploadEntry]:
        """Upload history, newest first."""
        return list(self._uploads)

    def clear(self) -> None:
        with self._lock:
            self._trades = ()
            self._uploads = []
        log.info("store_cleared")

    def __len__(self) -> int:
        return len(self._trades)
