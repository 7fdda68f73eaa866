"""Analytics and ledger engine — pure, synchronous recomputation over trades."""

from dual_tracker.engine.aggregator import asset_returns, compute_stats
from dual_tracker.engine.filtering import apply_filters, available_assets, make_filter_config
from dual_tracker.engine.ledger import acquisition_history, build_ledger
from dual_tracker.engine.normalizer import (
    NormalizationResult,
    normalize_batches,
    normalize_record,
    unwrap_batch,
)
from dual_tracker.engine.outcome import classify, target_reached
from dual_tracker.engine.report import Report, annotate, annotate_all, build_report
from dual_tracker.engine.returns import compute_return, duration_days, reward_amount
from dual_tracker.engine.valuation import trade_valuation, valuation

__all__ = [
    "NormalizationResult",
    "Report",
    "acquisition_history",
    "annotate",
    "annotate_all",
    "apply_filters",
    "asset_returns",
    "available_assets",
    "build_ledger",
    "build_report",
    "classify",
    "compute_return",
    "compute_stats",
    "duration_days",
    "make_filter_config",
    "normalize_batches",
    "normalize_record",
    "reward_amount",
    "target_reached",
    "trade_valuation",
    "unwrap_batch",
    "valuation",
]
