"""Trading metrics — pure formulas shared by the aggregator."""

from dual_tracker.metrics.formulas import (
    average_duration_days,
    return_rate,
    win_rate,
)

__all__ = [
    "average_duration_days",
    "return_rate",
    "win_rate",
]
