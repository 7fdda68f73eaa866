"""Shared test builders."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from dual_tracker.models import Direction, Trade, TradeStatus

DAY_MS = 86_400_000
T0_MS = 1_700_000_000_000
T0 = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)  # == T0_MS


def raw_record(
    id: str = "1",
    underlying: str = "BTC",
    investment_asset: str = "USDT",
    type: str = "DOWN",
    linked_price: str = "100",
    amount: str = "1000",
    earning_rate: str = "10",
    purchase_day: int = 0,
    settle_day: int = 30,
    status: str = "SETTLED",
    settle_price: str | None = "95",
    **extra,
) -> dict:
    """A record shaped like the exchange export."""
    record = {
        "id": id,
        "underlying": underlying,
        "investmentAsset": investment_asset,
        "type": type,
        "linkedPrice": linked_price,
        "amount": amount,
        "earningRate": earning_rate,
        "puchaseTime": str(T0_MS + purchase_day * DAY_MS),
        "projectSettleDateTime": str(T0_MS + settle_day * DAY_MS),
        "status": status,
        "settlePrice": settle_price,
    }
    record.update(extra)
    return record


def wrap(*records: dict) -> dict:
    return {
        "code": "000000",
        "message": None,
        "messageDetail": None,
        "data": list(records),
        "total": len(records),
        "success": True,
    }


def make_trade(
    id: str = "1",
    underlying: str = "BTC",
    investment_asset: str = "USDT",
    direction: Direction = Direction.BUY_LOW,
    target_price: str = "100",
    amount: str = "1000",
    rate: str = "10",
    purchase_day: float = 0,
    settle_day: float = 30,
    settle_price: str | None = "95",
    target_asset: str | None = None,
) -> Trade:
    return Trade(
        id=id,
        underlying=underlying,
        investment_asset=investment_asset,
        target_asset=target_asset,
        direction=direction,
        target_price=Decimal(target_price),
        amount=Decimal(amount),
        annual_rate_percent=Decimal(rate),
        purchase_time=T0 + timedelta(days=purchase_day),
        settlement_due_time=T0 + timedelta(days=settle_day),
        status=TradeStatus.SETTLED if settle_price is not None else TradeStatus.ACTIVE,
        settle_price=Decimal(settle_price) if settle_price is not None else None,
    )


@pytest.fixture
def sample_trades() -> list[Trade]:
    """A small mixed book: two BTC buys, one ETH sell, one active, one miss."""
    return [
        make_trade(id="b1", target_price="100", amount="1000", settle_price="95", purchase_day=0, settle_day=7),
        make_trade(id="b2", target_price="110", amount="500", settle_price="120", purchase_day=2, settle_day=9),
        make_trade(
            id="s1",
            underlying="ETH",
            investment_asset="ETH",
            direction=Direction.SELL_HIGH,
            target_price="2000",
            amount="1",
            settle_price="2100",
            purchase_day=3,
            settle_day=10,
        ),
        make_trade(id="a1", target_price="90", amount="200", settle_price=None, purchase_day=5, settle_day=12),
        make_trade(id="b3", target_price="105", amount="300", settle_price="100", purchase_day=6, settle_day=13),
    ]
