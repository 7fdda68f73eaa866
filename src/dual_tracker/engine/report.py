"""Report builder — one full recomputation over a trade snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Collection, Iterable

import structlog

from dual_tracker.engine.aggregator import SortKey, asset_returns, compute_stats
from dual_tracker.engine.filtering import apply_filters
from dual_tracker.engine.ledger import build_ledger
from dual_tracker.engine.outcome import DEFAULT_QUOTE_ASSET, classify
from dual_tracker.engine.returns import compute_return
from dual_tracker.engine.valuation import DEFAULT_STABLE_ASSETS, trade_valuation
from dual_tracker.models.filters import FilterConfig
from dual_tracker.models.results import ClassifiedTrade
from dual_tracker.models.snapshot import AcquisitionLedgerEntry, AssetReturn, StatsSnapshot
from dual_tracker.models.trade import Trade

log = structlog.get_logger("report")


def annotate(
    trade: Trade,
    stable_assets: Collection[str] = DEFAULT_STABLE_ASSETS,
    quote_asset: str = DEFAULT_QUOTE_ASSET,
) -> ClassifiedTrade:
    outcome = classify(trade, quote_asset)
    return ClassifiedTrade(
        trade=trade,
        valuation=trade_valuation(trade, stable_assets),
        outcome=outcome,
        returns=compute_return(trade, outcome, stable_assets),
    )


def annotate_all(
    trades: Iterable[Trade],
    stable_assets: Collection[str] = DEFAULT_STABLE_ASSETS,
    quote_asset: str | None = None,
) -> list[ClassifiedTrade]:
    stable_assets = tuple(stable_assets)
    if quote_asset is None:
        quote_asset = stable_assets[0] if stable_assets else DEFAULT_QUOTE_ASSET
    return [annotate(t, stable_assets, quote_asset) for t in trades]


@dataclass
class Report:
    """Everything the presentation layer shows for one filter configuration."""

    filters: FilterConfig
    generated_at: datetime
    trades: list[ClassifiedTrade] = field(default_factory=list)
    stats: StatsSnapshot = field(default_factory=StatsSnapshot)
    returns: list[AssetReturn] = field(default_factory=list)
    ledger: list[AcquisitionLedgerEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        """camelCase, JSON-ready output contract."""
        return {
            "filters": self.filters.model_dump(mode="json", by_alias=True),
            "generatedAt": self.generated_at.isoformat(),
            "stats": self.stats.model_dump(mode="json", by_alias=True),
            "trades": [t.model_dump(mode="json", by_alias=True) for t in self.trades],
            "assetReturns": [r.model_dump(mode="json", by_alias=True) for r in self.returns],
            "ledger": [e.model_dump(mode="json", by_alias=True) for e in self.ledger],
        }


def build_report(
    trades: Iterable[Trade],
    filters: FilterConfig | None = None,
    *,
    now: datetime | None = None,
    stable_assets: Collection[str] = DEFAULT_STABLE_ASSETS,
    sort_by: SortKey = "return_rate",
) -> Report:
    """Filter, classify and aggregate a trade snapshot.

    The ledger honours only the time window and asset filters: it replays
    the full buy and sell history of each asset, so direction and status
    filters would corrupt it.
    """
    filters = filters or FilterConfig()
    now = now or datetime.now(timezone.utc)
    trades = tuple(trades)

    classified = annotate_all(apply_filters(trades, filters, now), stable_assets)
    ledger_filters = FilterConfig(time_window=filters.time_window, asset=filters.asset)
    report = Report(
        filters=filters,
        generated_at=now,
        trades=classified,
        stats=compute_stats(classified),
        returns=asset_returns(classified, sort_by),
        ledger=build_ledger(trades, ledger_filters, now),
    )
    log.info(
        "report_built",
        trades=len(classified),
        assets=len(report.ledger),
        time_window=filters.time_window.value,
    )
    return report
