"""Pure metric computation functions."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

import numpy as np


def win_rate(wins: int, losses: int) -> float:
    """Win rate as a percentage 0-100 over decided trades only."""
    decided = wins + losses
    if decided <= 0:
        return 0.0
    return wins / decided * 100


def return_rate(total_reward: Decimal, total_invested: Decimal) -> float:
    """Reward as a percentage of the capital that earned it."""
    if total_invested <= 0:
        return 0.0
    return float(total_reward / total_invested * 100)


def average_duration_days(durations: Sequence[Decimal | float]) -> float:
    """Mean contract duration in days."""
    if len(durations) == 0:
        return 0.0
    arr = np.array([float(d) for d in durations], dtype=np.float64)
    return float(np.mean(arr))
