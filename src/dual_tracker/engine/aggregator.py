"""Aggregator — folds classified trades into summary statistics.

All totals are reference-unit sums of each trade's valuation; native
amounts of different assets are never added together.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Literal

from dual_tracker.errors import ConfigError
from dual_tracker.metrics.formulas import average_duration_days, return_rate, win_rate
from dual_tracker.models.results import ClassifiedTrade
from dual_tracker.models.snapshot import AssetReturn, StatsSnapshot
from dual_tracker.models.trade import Direction

ZERO = Decimal("0")

SortKey = Literal["return_rate", "total_return"]


def compute_stats(classified: Iterable[ClassifiedTrade]) -> StatsSnapshot:
    """Fold an already-filtered set of classified trades into a StatsSnapshot."""
    total = wins = losses = active = 0
    total_invested = active_invested = settled_invested = ZERO
    total_returned = expected_active_reward = ZERO
    by_asset: dict[str, Decimal] = {}
    by_direction: dict[str, Decimal] = {d.value: ZERO for d in Direction}

    for item in classified:
        trade = item.trade
        total += 1
        total_invested += item.valuation
        by_asset[trade.underlying] = by_asset.get(trade.underlying, ZERO) + item.valuation
        by_direction[trade.direction.value] += item.valuation

        if trade.is_settled:
            settled_invested += item.valuation
            total_returned += item.returns.reward_reference
            if item.outcome.target_reached:
                wins += 1
            else:
                losses += 1
        else:
            active += 1
            active_invested += item.valuation
            expected_active_reward += item.returns.reward_reference

    return StatsSnapshot(
        total_trades=total,
        winning_trades=wins,
        losing_trades=losses,
        active_trades=active,
        settled_trades=wins + losses,
        total_invested=total_invested,
        active_invested=active_invested,
        settled_invested=settled_invested,
        total_returned=total_returned,
        expected_active_reward=expected_active_reward,
        win_rate=win_rate(wins, losses),
        average_return_rate=return_rate(total_returned, settled_invested),
        by_asset=by_asset,
        by_direction=by_direction,
    )


def asset_returns(
    classified: Iterable[ClassifiedTrade],
    sort_by: SortKey = "return_rate",
) -> list[AssetReturn]:
    """Per-underlying return breakdown over settled trades, best first."""
    if sort_by not in ("return_rate", "total_return"):
        raise ConfigError(f"unrecognised sort key: {sort_by!r}")

    groups: dict[str, list[ClassifiedTrade]] = defaultdict(list)
    for item in classified:
        if item.trade.is_settled:
            groups[item.trade.underlying].append(item)

    results = []
    for asset, items in groups.items():
        invested = sum((i.valuation for i in items), ZERO)
        reward = sum((i.returns.reward_reference for i in items), ZERO)
        wins = sum(1 for i in items if i.outcome.target_reached)
        results.append(
            AssetReturn(
                asset=asset,
                total_return=reward,
                total_invested=invested,
                return_rate=return_rate(reward, invested),
                completed_trades=len(items),
                win_rate=win_rate(wins, len(items) - wins),
                average_duration_days=average_duration_days([i.returns.duration_days for i in items]),
            )
        )

    results.sort(key=lambda r: getattr(r, sort_by), reverse=True)
    return results
