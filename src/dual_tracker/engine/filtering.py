"""Trade filters — time window, asset, direction and status, all conjunctive."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from dual_tracker.errors import ConfigError
from dual_tracker.models.filters import FilterConfig
from dual_tracker.models.trade import Trade


def make_filter_config(values: Mapping[str, Any] | FilterConfig | None = None, **overrides: Any) -> FilterConfig:
    """Build a FilterConfig, turning unknown values into ConfigError.

    *values* may use either the camelCase (``timeWindow``) or the snake_case
    field names; keyword *overrides* use snake_case and skip None.
    """
    try:
        base = values if isinstance(values, FilterConfig) else FilterConfig.model_validate(values or {})
        data = base.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return FilterConfig.model_validate(data)
    except PydanticValidationError as exc:
        bad = ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}={err.get('input')!r}" for err in exc.errors()
        )
        raise ConfigError(f"unrecognised filter value: {bad}") from None


def matches(trade: Trade, filters: FilterConfig, now: datetime) -> bool:
    span = filters.time_window.span
    if span is not None and now - trade.purchase_time > span:
        return False
    if filters.asset != "all" and trade.underlying != filters.asset:
        return False
    if filters.direction != "all" and trade.direction.value != filters.direction:
        return False
    if filters.status != "all" and trade.status.value != filters.status:
        return False
    return True


def apply_filters(
    trades: Iterable[Trade],
    filters: FilterConfig | None = None,
    now: datetime | None = None,
) -> list[Trade]:
    """Trades passing every filter, in input order."""
    trades = list(trades)
    if filters is None:
        return trades
    if now is None:
        now = datetime.now(timezone.utc)
    return [t for t in trades if matches(t, filters, now)]


def available_assets(trades: Iterable[Trade]) -> list[str]:
    """Distinct underlyings, sorted — the choices for the asset filter."""
    return sorted({t.underlying for t in trades})
