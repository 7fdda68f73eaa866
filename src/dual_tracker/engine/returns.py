"""Return calculator — prorated reward, paid whatever the outcome."""

from __future__ import annotations

from decimal import Decimal
from typing import Collection

from dual_tracker.engine.outcome import convert_at_target
from dual_tracker.engine.valuation import DEFAULT_STABLE_ASSETS, valuation
from dual_tracker.models.results import OutcomeResult, ReturnResult
from dual_tracker.models.trade import Trade

SECONDS_PER_DAY = Decimal(86400)
DAYS_PER_YEAR = Decimal(365)


def duration_days(trade: Trade) -> Decimal:
    """Contract length in days, floored at zero."""
    delta = trade.settlement_due_time - trade.purchase_time
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    if seconds <= 0:
        return Decimal("0")
    return seconds / SECONDS_PER_DAY


def reward_amount(amount: Decimal, annual_rate_percent: Decimal, days: Decimal) -> Decimal:
    """amount * (rate / 100) * (days / 365)"""
    if days <= 0:
        return Decimal("0")
    return amount * (annual_rate_percent / 100) * (days / DAYS_PER_YEAR)


def compute_return(
    trade: Trade,
    outcome: OutcomeResult,
    stable_assets: Collection[str] = DEFAULT_STABLE_ASSETS,
) -> ReturnResult:
    """Compute the reward in the investment asset, reference units and payout asset.

    The reward itself never depends on the outcome. Only the payout view
    follows the resolved asset: a reached contract pays its reward in the
    counter asset, converted at the target price.
    """
    days = duration_days(trade)
    reward = reward_amount(trade.amount, trade.annual_rate_percent, days)

    if outcome.target_reached:
        payout_asset = outcome.resolved_asset
        payout_reward = convert_at_target(trade, reward)
    else:
        payout_asset = trade.investment_asset
        payout_reward = reward

    return ReturnResult(
        duration_days=days,
        reward_amount=reward,
        reward_asset=trade.investment_asset,
        reward_reference=valuation(reward, trade.investment_asset, trade.target_price, stable_assets),
        payout_asset=payout_asset,
        payout_reward=payout_reward,
    )
