"""Aggregation filter configuration."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Literal

from pydantic import ConfigDict, Field, field_validator

from dual_tracker.models.base import OutputModel


class TimeWindow(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def span(self) -> timedelta | None:
        """Look-back span from "now", or None for no limit."""
        return _WINDOW_SPANS.get(self)


_WINDOW_SPANS = {
    TimeWindow.WEEK: timedelta(days=7),
    TimeWindow.MONTH: timedelta(days=30),
    TimeWindow.QUARTER: timedelta(days=90),
    TimeWindow.YEAR: timedelta(days=365),
}


class FilterConfig(OutputModel):
    """Conjunctive trade filters; every field defaults to "all".

    Accepts both `timeWindow` and `time_window`; unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid")

    time_window: TimeWindow = TimeWindow.ALL
    asset: str = Field(default="all", min_length=1)
    direction: Literal["all", "SELL_HIGH", "BUY_LOW"] = "all"
    status: Literal["all", "ACTIVE", "SETTLED"] = "all"

    @field_validator("asset")
    @classmethod
    def _normalize_asset(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("asset must not be blank")
        return "all" if value.lower() == "all" else value.upper()
