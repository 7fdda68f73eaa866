"""Pydantic domain models."""

from dual_tracker.models.base import OutputModel
from dual_tracker.models.filters import FilterConfig, TimeWindow
from dual_tracker.models.results import (
    ClassifiedTrade,
    OutcomeResult,
    OutcomeState,
    ReturnResult,
)
from dual_tracker.models.snapshot import (
    AcquisitionLedgerEntry,
    AcquisitionPoint,
    AssetReturn,
    StatsSnapshot,
)
from dual_tracker.models.trade import Direction, Trade, TradeStatus
from dual_tracker.models.upload import UploadEntry

__all__ = [
    "AcquisitionLedgerEntry",
    "AcquisitionPoint",
    "AssetReturn",
    "ClassifiedTrade",
    "Direction",
    "FilterConfig",
    "OutcomeResult",
    "OutcomeState",
    "OutputModel",
    "ReturnResult",
    "StatsSnapshot",
    "TimeWindow",
    "Trade",
    "TradeStatus",
    "UploadEntry",
]
