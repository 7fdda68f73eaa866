"""Outcome classifier — settlement state machine per trade.

PENDING (ACTIVE trade) -> RESOLVED_PRIMARY (target reached, paid out in the
other asset at the target price) | RESOLVED_SECONDARY (target missed, paid
out in the investment asset). Equality with the target counts as reached in
both directions.
"""

from __future__ import annotations

from decimal import Decimal

from dual_tracker.models.results import OutcomeResult, OutcomeState
from dual_tracker.models.trade import Direction, Trade

DEFAULT_QUOTE_ASSET = "USDT"


def target_reached(direction: Direction, settle_price: Decimal, target_price: Decimal) -> bool:
    if direction is Direction.SELL_HIGH:
        return settle_price >= target_price
    return settle_price <= target_price


def counter_asset(trade: Trade, quote_asset: str = DEFAULT_QUOTE_ASSET) -> str:
    """The asset a trade converts into when its target is reached."""
    if trade.target_asset:
        return trade.target_asset
    if trade.funded_in_underlying:
        return quote_asset
    return trade.underlying


def convert_at_target(trade: Trade, amount: Decimal) -> Decimal:
    """Convert an investment-asset amount into the counter asset at the target price.

    Funded in the underlying: underlying -> quote, multiply.
    Otherwise: quote -> underlying, divide.
    """
    if trade.funded_in_underlying:
        return amount * trade.target_price
    return amount / trade.target_price


def classify(trade: Trade, quote_asset: str = DEFAULT_QUOTE_ASSET) -> OutcomeResult:
    """Resolve a trade's outcome; ACTIVE trades stay PENDING."""
    if not trade.is_settled:
        return OutcomeResult(state=OutcomeState.PENDING)

    reached = target_reached(trade.direction, trade.settle_price, trade.target_price)
    if reached:
        return OutcomeResult(
            state=OutcomeState.RESOLVED_PRIMARY,
            target_reached=True,
            resolved_asset=counter_asset(trade, quote_asset),
            resolved_amount=convert_at_target(trade, trade.amount),
        )
    return OutcomeResult(
        state=OutcomeState.RESOLVED_SECONDARY,
        target_reached=False,
        resolved_asset=trade.investment_asset,
        resolved_amount=trade.amount,
    )
