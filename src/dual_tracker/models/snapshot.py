"""Aggregated output value objects handed to the presentation layer."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from dual_tracker.models.base import OutputModel


class StatsSnapshot(OutputModel):
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    active_trades: int = 0
    settled_trades: int = 0
    total_invested: Decimal = Decimal("0")
    active_invested: Decimal = Decimal("0")
    settled_invested: Decimal = Decimal("0")
    total_returned: Decimal = Decimal("0")
    expected_active_reward: Decimal = Decimal("0")
    win_rate: float = 0.0
    average_return_rate: float = 0.0
    by_asset: dict[str, Decimal] = Field(default_factory=dict)
    by_direction: dict[str, Decimal] = Field(default_factory=dict)


class AssetReturn(OutputModel):
    """Return breakdown for the settled trades of one underlying."""

    asset: str
    total_return: Decimal
    total_invested: Decimal
    return_rate: float
    completed_trades: int
    win_rate: float
    average_duration_days: float


class AcquisitionPoint(OutputModel):
    """One buy event in the cumulative acquisition history."""

    timestamp: datetime
    price: Decimal
    quantity: Decimal
    cumulative_quantity: Decimal
    average_price: Decimal


class AcquisitionLedgerEntry(OutputModel):
    """Weighted-average cost basis for one underlying.

    ``average_price`` is None while ``total_quantity`` is zero.
    """

    asset: str
    total_quantity: Decimal
    total_invested: Decimal
    average_price: Decimal | None = None
    buy_low_count: int = 0
    sell_high_count: int = 0
    inconsistent: bool = False
    history: list[AcquisitionPoint] = Field(default_factory=list)
