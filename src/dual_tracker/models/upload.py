"""Upload history entry."""

from __future__ import annotations

from datetime import datetime

from dual_tracker.models.base import OutputModel


class UploadEntry(OutputModel):
    """One submitted batch and what became of its records."""

    id: int
    timestamp: datetime
    record_count: int
    accepted: int
    duplicates: int
    rejected: int
