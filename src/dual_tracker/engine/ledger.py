"""Acquisition ledger — weighted-average cost basis per underlying.

Replays settled, target-reached trades in ascending purchase time:

- BUY_LOW adds ``amount / target_price`` units at a cost of ``amount``.
- SELL_HIGH funded in the underlying removes ``amount`` units and
  ``amount * target_price`` of cost.

A disposal larger than the tracked holdings clamps the asset to zero and
marks it inconsistent; the replay carries on. Every build starts from an
empty state, nothing is kept between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from itertools import accumulate
from typing import Iterable

import structlog

from dual_tracker.engine.filtering import apply_filters
from dual_tracker.engine.outcome import target_reached
from dual_tracker.models.filters import FilterConfig
from dual_tracker.models.snapshot import AcquisitionLedgerEntry, AcquisitionPoint
from dual_tracker.models.trade import Direction, Trade

log = structlog.get_logger("ledger")

ZERO = Decimal("0")


@dataclass
class _AssetState:
    """Running totals for one asset during a single replay."""

    total_quantity: Decimal = ZERO
    total_invested: Decimal = ZERO
    buy_low_count: int = 0
    sell_high_count: int = 0
    inconsistent: bool = False
    buys: list[Trade] = field(default_factory=list)

    def acquire(self, trade: Trade) -> None:
        self.total_quantity += trade.amount / trade.target_price
        self.total_invested += trade.amount
        self.buy_low_count += 1
        self.buys.append(trade)

    def dispose(self, trade: Trade) -> None:
        remaining = self.total_quantity - trade.amount
        if remaining < 0:
            log.warning(
                "ledger_oversell",
                asset=trade.underlying,
                trade_id=trade.id,
                held=str(self.total_quantity),
                disposed=str(trade.amount),
            )
            self.inconsistent = True
            self.total_quantity = ZERO
            self.total_invested = ZERO
            return
        self.total_quantity = remaining
        if remaining == 0:
            self.total_invested = ZERO
        else:
            self.total_invested -= trade.amount * trade.target_price

    @property
    def average_price(self) -> Decimal | None:
        if self.total_quantity == 0:
            return None
        return self.total_invested / self.total_quantity


def _reached(trade: Trade) -> bool:
    return trade.is_settled and target_reached(trade.direction, trade.settle_price, trade.target_price)


def chronological(trades: Iterable[Trade]) -> list[Trade]:
    """Trades by ascending purchase time; ties keep input order."""
    return sorted(trades, key=lambda t: t.purchase_time)


def acquisition_history(buys: Iterable[Trade]) -> list[AcquisitionPoint]:
    """Cumulative prefix scan over chronologically ordered buy events."""
    buys = list(buys)
    quantities = [t.amount / t.target_price for t in buys]
    running_qty = accumulate(quantities)
    running_cost = accumulate(t.amount for t in buys)
    return [
        AcquisitionPoint(
            timestamp=trade.purchase_time,
            price=trade.target_price,
            quantity=qty,
            cumulative_quantity=cum_qty,
            average_price=cum_cost / cum_qty,
        )
        for trade, qty, cum_qty, cum_cost in zip(buys, quantities, running_qty, running_cost)
    ]


def build_ledger(
    trades: Iterable[Trade],
    filters: FilterConfig | None = None,
    now: datetime | None = None,
) -> list[AcquisitionLedgerEntry]:
    """Replay qualifying trades and return one entry per referenced asset.

    Args:
        trades: Canonical trades in any order; the input is not modified.
        filters: Optional filters (typically just a time window) applied
            before the replay.
        now: Reference time for the time window.

    Returns:
        Entries sorted by ``total_invested``, largest first.
    """
    states: dict[str, _AssetState] = {}

    for trade in chronological(apply_filters(trades, filters, now)):
        if not _reached(trade):
            continue
        if trade.direction is Direction.BUY_LOW:
            states.setdefault(trade.underlying, _AssetState()).acquire(trade)
        else:
            state = states.setdefault(trade.underlying, _AssetState())
            state.sell_high_count += 1
            if trade.funded_in_underlying:
                state.dispose(trade)

    entries = [
        AcquisitionLedgerEntry(
            asset=asset,
            total_quantity=state.total_quantity,
            total_invested=state.total_invested,
            average_price=state.average_price,
            buy_low_count=state.buy_low_count,
            sell_high_count=state.sell_high_count,
            inconsistent=state.inconsistent,
            history=acquisition_history(state.buys),
        )
        for asset, state in states.items()
    ]
    entries.sort(key=lambda e: e.total_invested, reverse=True)
    return entries
