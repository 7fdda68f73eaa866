"""Valuation rule — amounts in any asset expressed in reference units."""

from __future__ import annotations

from decimal import Decimal
from typing import Collection

from dual_tracker.models.trade import Trade

DEFAULT_STABLE_ASSETS: tuple[str, ...] = ("USDT", "USDC")


def valuation(
    amount: Decimal,
    asset: str,
    reference_rate: Decimal,
    stable_assets: Collection[str] = DEFAULT_STABLE_ASSETS,
) -> Decimal:
    """Convert *amount* of *asset* into reference units.

    Stable assets are worth their face amount. Anything else is converted at
    *reference_rate*, which callers always take from the trade's own target
    price, never from a market quote.
    """
    if asset in stable_assets:
        return amount
    return amount * reference_rate


def trade_valuation(
    trade: Trade,
    stable_assets: Collection[str] = DEFAULT_STABLE_ASSETS,
) -> Decimal:
    """The trade's subscription amount in reference units."""
    return valuation(trade.amount, trade.investment_asset, trade.target_price, stable_assets)
