"""Per-trade derived results."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from dual_tracker.models.base import OutputModel
from dual_tracker.models.trade import Trade


class OutcomeState(str, Enum):
    PENDING = "PENDING"
    RESOLVED_PRIMARY = "RESOLVED_PRIMARY"
    RESOLVED_SECONDARY = "RESOLVED_SECONDARY"


class OutcomeResult(OutputModel):
    """Settlement outcome. ``target_reached`` is None while the trade is pending."""

    state: OutcomeState
    target_reached: bool | None = None
    resolved_asset: str | None = None
    resolved_amount: Decimal | None = None

    @property
    def is_win(self) -> bool:
        return self.target_reached is True


class ReturnResult(OutputModel):
    """Prorated reward, computed for every trade whatever its outcome."""

    duration_days: Decimal
    reward_amount: Decimal
    reward_asset: str
    reward_reference: Decimal
    payout_asset: str
    payout_reward: Decimal


class ClassifiedTrade(OutputModel):
    """A trade annotated with its valuation, outcome and return."""

    trade: Trade
    valuation: Decimal
    outcome: OutcomeResult
    returns: ReturnResult
