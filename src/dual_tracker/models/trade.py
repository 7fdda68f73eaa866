"""Canonical trade model and its closed variant sets."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import Field, model_validator

from dual_tracker.models.base import OutputModel


class Direction(str, Enum):
    """Target price above (SELL_HIGH) or below (BUY_LOW) market at subscription."""

    SELL_HIGH = "SELL_HIGH"
    BUY_LOW = "BUY_LOW"


class TradeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    SETTLED = "SETTLED"


class Trade(OutputModel):
    """One dual investment contract, immutable once normalized."""

    id: str
    underlying: str
    investment_asset: str
    target_asset: str | None = None
    direction: Direction
    target_price: Decimal = Field(gt=0)
    amount: Decimal = Field(gt=0)
    annual_rate_percent: Decimal = Field(ge=0)
    purchase_time: datetime
    settlement_due_time: datetime
    status: TradeStatus
    settle_price: Decimal | None = None

    @model_validator(mode="after")
    def _check_invariants(self) -> "Trade":
        if self.settlement_due_time < self.purchase_time:
            raise ValueError("settlement_due_time precedes purchase_time")
        if self.status is TradeStatus.SETTLED and self.settle_price is None:
            raise ValueError("SETTLED trade without settle_price")
        if self.status is TradeStatus.ACTIVE and self.settle_price is not None:
            raise ValueError("ACTIVE trade with settle_price")
        return self

    @property
    def is_settled(self) -> bool:
        return self.status is TradeStatus.SETTLED

    @property
    def funded_in_underlying(self) -> bool:
        """True when the subscription amount is denominated in the tracked asset."""
        return self.investment_asset == self.underlying
