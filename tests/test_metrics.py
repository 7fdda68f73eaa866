"""Tests for the dual_tracker.metrics formulas."""

from __future__ import annotations

from decimal import Decimal

import pytest

from dual_tracker.metrics.formulas import average_duration_days, return_rate, win_rate


class TestWinRate:
    def test_basic(self):
        assert win_rate(2, 1) == pytest.approx(66.6667, rel=1e-4)

    def test_no_decided_trades(self):
        assert win_rate(0, 0) == 0.0

    def test_all_wins(self):
        assert win_rate(5, 0) == pytest.approx(100.0)


class TestReturnRate:
    def test_basic(self):
        assert return_rate(Decimal("8.2"), Decimal("1000")) == pytest.approx(0.82)

    def test_nothing_invested(self):
        assert return_rate(Decimal("5"), Decimal("0")) == 0.0


class TestAverageDuration:
    def test_mean(self):
        assert average_duration_days([Decimal("7"), Decimal("14"), 3.0]) == pytest.approx(8.0)

    def test_empty(self):
        assert average_duration_days([]) == 0.0
