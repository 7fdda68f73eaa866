"""Tests for the settlement outcome classifier."""

from __future__ import annotations

from decimal import Decimal

import pytest

from conftest import make_trade
from dual_tracker.engine.outcome import classify, counter_asset, target_reached
from dual_tracker.models import Direction, OutcomeState


class TestTargetReached:
    @pytest.mark.parametrize(
        "settle,expected",
        [("105", True), ("100", True), ("99.99", False)],
    )
    def test_sell_high(self, settle, expected):
        assert target_reached(Direction.SELL_HIGH, Decimal(settle), Decimal("100")) is expected

    @pytest.mark.parametrize(
        "settle,expected",
        [("95", True), ("100", True), ("100.01", False)],
    )
    def test_buy_low(self, settle, expected):
        assert target_reached(Direction.BUY_LOW, Decimal(settle), Decimal("100")) is expected


class TestClassify:
    def test_active_is_pending(self):
        result = classify(make_trade(settle_price=None))
        assert result.state is OutcomeState.PENDING
        assert result.target_reached is None
        assert result.resolved_asset is None
        assert result.is_win is False

    def test_buy_low_reached_resolves_into_underlying(self):
        result = classify(make_trade(target_price="100", amount="1000", settle_price="95"))
        assert result.state is OutcomeState.RESOLVED_PRIMARY
        assert result.target_reached is True
        assert result.is_win is True
        assert result.resolved_asset == "BTC"
        assert result.resolved_amount == Decimal("10")

    def test_buy_low_missed_keeps_investment_asset(self):
        result = classify(make_trade(target_price="100", amount="1000", settle_price="101"))
        assert result.state is OutcomeState.RESOLVED_SECONDARY
        assert result.target_reached is False
        assert result.resolved_asset == "USDT"
        assert result.resolved_amount == Decimal("1000")

    def test_sell_high_reached_resolves_into_quote(self):
        trade = make_trade(
            investment_asset="BTC",
            direction=Direction.SELL_HIGH,
            target_price="60000",
            amount="0.5",
            settle_price="61000",
        )
        result = classify(trade)
        assert result.resolved_asset == "USDT"
        assert result.resolved_amount == Decimal("30000")

    def test_quote_asset_override(self):
        trade = make_trade(
            investment_asset="BTC",
            direction=Direction.SELL_HIGH,
            settle_price="150",
        )
        assert classify(trade, quote_asset="USDC").resolved_asset == "USDC"

    def test_exact_target_is_a_win_both_ways(self):
        for direction, asset in ((Direction.BUY_LOW, "USDT"), (Direction.SELL_HIGH, "BTC")):
            trade = make_trade(direction=direction, investment_asset=asset, settle_price="100")
            assert classify(trade).target_reached is True


class TestCounterAsset:
    def test_explicit_target_asset_wins(self):
        assert counter_asset(make_trade(target_asset="FDUSD", investment_asset="BTC")) == "FDUSD"

    def test_stable_funded_converts_to_underlying(self):
        assert counter_asset(make_trade()) == "BTC"
