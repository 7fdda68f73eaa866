"""Tests for the prorated return calculator."""

from __future__ import annotations

from decimal import Decimal

import pytest

from conftest import make_trade
from dual_tracker.engine.outcome import classify
from dual_tracker.engine.returns import compute_return, duration_days, reward_amount
from dual_tracker.models import Direction


class TestDuration:
    def test_whole_days(self):
        assert duration_days(make_trade(purchase_day=0, settle_day=30)) == Decimal("30")

    def test_fractional_days(self):
        assert duration_days(make_trade(purchase_day=0, settle_day=1.5)) == Decimal("1.5")

    def test_zero_length(self):
        assert duration_days(make_trade(purchase_day=3, settle_day=3)) == Decimal("0")


class TestRewardAmount:
    def test_thirty_day_example(self):
        reward = reward_amount(Decimal("1000"), Decimal("10"), Decimal("30"))
        assert float(reward) == pytest.approx(8.219178, rel=1e-6)

    def test_zero_days_no_reward(self):
        assert reward_amount(Decimal("1000"), Decimal("10"), Decimal("0")) == Decimal("0")

    def test_zero_rate(self):
        assert reward_amount(Decimal("1000"), Decimal("0"), Decimal("30")) == Decimal("0")


class TestComputeReturn:
    def test_reward_is_outcome_independent(self):
        hit = make_trade(settle_price="90")
        miss = make_trade(settle_price="110")
        pending = make_trade(settle_price=None)
        rewards = {
            compute_return(t, classify(t)).reward_amount for t in (hit, miss, pending)
        }
        assert len(rewards) == 1
        assert float(rewards.pop()) == pytest.approx(8.219178, rel=1e-6)

    def test_reward_never_negative(self):
        trade = make_trade(purchase_day=2, settle_day=2)
        assert compute_return(trade, classify(trade)).reward_amount >= 0

    def test_buy_low_hit_pays_reward_in_underlying(self):
        trade = make_trade(target_price="100", amount="1000", settle_price="95")
        result = compute_return(trade, classify(trade))
        assert result.reward_asset == "USDT"
        assert result.payout_asset == "BTC"
        assert result.payout_reward == result.reward_amount / Decimal("100")

    def test_miss_pays_in_investment_asset(self):
        trade = make_trade(settle_price="105")
        result = compute_return(trade, classify(trade))
        assert result.payout_asset == "USDT"
        assert result.payout_reward == result.reward_amount

    def test_reference_units_for_underlying_funded_trade(self):
        trade = make_trade(
            underlying="ETH",
            investment_asset="ETH",
            direction=Direction.SELL_HIGH,
            target_price="2000",
            amount="1",
            rate="36.5",
            settle_day=10,
            settle_price="1900",
        )
        result = compute_return(trade, classify(trade))
        # 1 ETH * 36.5% * 10/365 = 0.01 ETH -> 20 reference units
        assert float(result.reward_amount) == pytest.approx(0.01)
        assert float(result.reward_reference) == pytest.approx(20.0)
        assert result.payout_asset == "ETH"
