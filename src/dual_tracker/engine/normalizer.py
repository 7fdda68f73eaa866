"""Normalizer — strict parsing of raw exchange records into canonical Trades.

Raw records are untyped maps as exported by the exchange (camelCase keys,
numbers as strings, epoch-millisecond timestamps). Each record is parsed on
its own: a bad record is reported as a ValidationError and skipped, the rest
of the batch is kept. Dedup is by ``id``, first occurrence wins, across all
batches in submission order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Sequence

import structlog
from pydantic import ValidationError as PydanticValidationError

from dual_tracker.errors import ValidationError, ValidationErrorKind
from dual_tracker.models.trade import Direction, Trade, TradeStatus

log = structlog.get_logger("normalizer")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Raw numbers must lie within 1e-30 .. 1e30 in magnitude (zero aside).
MAX_EXPONENT = 30

# Trade field -> accepted raw keys, exchange export name first.
FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "id": ("id",),
    "underlying": ("underlying",),
    "investment_asset": ("investmentAsset",),
    "target_asset": ("targetAsset",),
    "direction": ("type", "direction"),
    "target_price": ("linkedPrice", "targetPrice"),
    "amount": ("amount",),
    "annual_rate_percent": ("earningRate", "annualRatePercent"),
    "purchase_time": ("puchaseTime", "purchaseTime"),
    "settlement_due_time": ("projectSettleDateTime", "settleDate", "settlementDueTime"),
    "status": ("status",),
    "settle_price": ("settlePrice",),
}

DIRECTION_ALIASES: dict[str, Direction] = {
    "UP": Direction.SELL_HIGH,
    "SELL_HIGH": Direction.SELL_HIGH,
    "DOWN": Direction.BUY_LOW,
    "BUY_LOW": Direction.BUY_LOW,
}

STATUS_ALIASES: dict[str, TradeStatus] = {
    "PURCHASE_SUCCESS": TradeStatus.ACTIVE,
    "ACTIVE": TradeStatus.ACTIVE,
    "SETTLED": TradeStatus.SETTLED,
}


@dataclass
class NormalizationResult:
    """Canonical trades (input order) plus what was left out and why."""

    trades: list[Trade] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)
    duplicates: int = 0

    @property
    def rejected(self) -> int:
        return len(self.errors)


# ── Field parsers ─────────────────────────────────────────────


def _lookup(record: Mapping[str, Any], name: str) -> Any:
    """First non-empty value among the raw keys for *name*, else None."""
    for key in FIELD_KEYS[name]:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def _require(record: Mapping[str, Any], name: str, ctx: dict) -> Any:
    value = _lookup(record, name)
    if value is None:
        raise ValidationError(
            ValidationErrorKind.MISSING_FIELD,
            f"missing field {FIELD_KEYS[name][0]!r}",
            field=name,
            **ctx,
        )
    return value


def parse_decimal(value: Any, name: str, ctx: dict) -> Decimal:
    """Strictly parse a raw number; bools, NaN and infinities are rejected."""
    if isinstance(value, bool):
        raise ValidationError(
            ValidationErrorKind.UNPARSABLE_NUMBER,
            f"{name}: boolean is not a number",
            field=name,
            **ctx,
        )
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(
            ValidationErrorKind.UNPARSABLE_NUMBER,
            f"{name}: cannot parse {value!r}",
            field=name,
            **ctx,
        ) from None
    if not result.is_finite():
        raise ValidationError(
            ValidationErrorKind.UNPARSABLE_NUMBER,
            f"{name}: {value!r} is not finite",
            field=name,
            **ctx,
        )
    if result and abs(result.adjusted()) > MAX_EXPONENT:
        raise ValidationError(
            ValidationErrorKind.INVALID_VALUE,
            f"{name}: {value!r} is out of range",
            field=name,
            **ctx,
        )
    return result


def parse_timestamp(value: Any, name: str, ctx: dict) -> datetime:
    """Epoch milliseconds (int or digit string) or ISO-8601, returned as UTC."""
    if isinstance(value, bool):
        value = None
    try:
        if isinstance(value, (int, float)):
            return EPOCH + timedelta(milliseconds=value)
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return EPOCH + timedelta(milliseconds=int(text))
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError, OSError):
        pass
    raise ValidationError(
        ValidationErrorKind.UNPARSABLE_TIMESTAMP,
        f"{name}: cannot parse timestamp {value!r}",
        field=name,
        **ctx,
    )


def _parse_variant(value: Any, aliases: Mapping[str, Any], name: str, ctx: dict) -> Any:
    key = str(value).strip().upper()
    if key not in aliases:
        raise ValidationError(
            ValidationErrorKind.INVALID_VALUE,
            f"{name}: unknown value {value!r}",
            field=name,
            **ctx,
        )
    return aliases[key]


# ── Record / batch parsing ────────────────────────────────────


def normalize_record(record: Any, index: int | None = None) -> Trade:
    """Parse one raw record into a Trade or raise ValidationError."""
    if not isinstance(record, Mapping):
        raise ValidationError(
            ValidationErrorKind.INVALID_VALUE,
            f"record is not an object: {type(record).__name__}",
            index=index,
        )

    raw_id = _lookup(record, "id")
    ctx = {"record_id": str(raw_id) if raw_id is not None else None, "index": index}
    if raw_id is None:
        raise ValidationError(
            ValidationErrorKind.MISSING_FIELD, "missing field 'id'", field="id", **ctx
        )

    direction = _parse_variant(_require(record, "direction", ctx), DIRECTION_ALIASES, "direction", ctx)
    status = _parse_variant(_require(record, "status", ctx), STATUS_ALIASES, "status", ctx)

    values: dict[str, Any] = {
        "id": str(raw_id),
        "underlying": str(_require(record, "underlying", ctx)).strip().upper(),
        "investment_asset": str(_require(record, "investment_asset", ctx)).strip().upper(),
        "direction": direction,
        "status": status,
    }
    target_asset = _lookup(record, "target_asset")
    if target_asset is not None:
        values["target_asset"] = str(target_asset).strip().upper()

    for name in ("target_price", "amount", "annual_rate_percent"):
        values[name] = parse_decimal(_require(record, name, ctx), name, ctx)
    for name in ("purchase_time", "settlement_due_time"):
        values[name] = parse_timestamp(_require(record, name, ctx), name, ctx)

    for name in ("target_price", "amount"):
        if values[name] <= 0:
            raise ValidationError(
                ValidationErrorKind.INVALID_VALUE,
                f"{name} must be positive, got {values[name]}",
                field=name,
                **ctx,
            )
    if values["annual_rate_percent"] < 0:
        raise ValidationError(
            ValidationErrorKind.INVALID_VALUE,
            "annual_rate_percent must not be negative",
            field="annual_rate_percent",
            **ctx,
        )
    if values["settlement_due_time"] < values["purchase_time"]:
        raise ValidationError(
            ValidationErrorKind.INVALID_VALUE,
            "settlement due time precedes purchase time",
            field="settlement_due_time",
            **ctx,
        )

    raw_settle = _lookup(record, "settle_price")
    if status is TradeStatus.SETTLED and raw_settle is None:
        raise ValidationError(
            ValidationErrorKind.INCONSISTENT_STATUS,
            "SETTLED record without settlePrice",
            field="settle_price",
            **ctx,
        )
    if status is TradeStatus.ACTIVE and raw_settle is not None:
        raise ValidationError(
            ValidationErrorKind.INCONSISTENT_STATUS,
            "ACTIVE record carries a settlePrice",
            field="settle_price",
            **ctx,
        )
    if raw_settle is not None:
        values["settle_price"] = parse_decimal(raw_settle, "settle_price", ctx)
        if values["settle_price"] <= 0:
            raise ValidationError(
                ValidationErrorKind.INVALID_VALUE,
                "settle_price must be positive",
                field="settle_price",
                **ctx,
            )

    try:
        return Trade(**values)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or ()
        raise ValidationError(
            ValidationErrorKind.INVALID_VALUE,
            first.get("msg", str(exc)),
            field=str(loc[0]) if loc else None,
            **ctx,
        ) from None


def unwrap_batch(payload: Any) -> Sequence[Any]:
    """Return the record list of an exchange export wrapper or a bare list."""
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError(
            ValidationErrorKind.MALFORMED_BATCH,
            f"batch must be an object or a list, got {type(payload).__name__}",
        )
    if payload.get("success") is False:
        raise ValidationError(
            ValidationErrorKind.MALFORMED_BATCH,
            f"batch reports failure: {payload.get('message') or payload.get('code')}",
        )
    records = payload.get("data")
    if not isinstance(records, list):
        raise ValidationError(
            ValidationErrorKind.MALFORMED_BATCH,
            "batch 'data' must be a list",
            field="data",
        )
    total = payload.get("total")
    if isinstance(total, int) and not isinstance(total, bool) and total != len(records):
        log.warning("batch_total_mismatch", declared=total, received=len(records))
    return records


def normalize_batches(
    batches: Iterable[Any],
    existing: Iterable[Trade] = (),
) -> NormalizationResult:
    """Merge raw batches into an ordered, deduplicated list of Trades.

    Args:
        batches: Raw batches (export wrappers or bare record lists), in
            submission order.
        existing: Trades already accepted earlier; their ids take precedence
            and they are not repeated in the result.

    Nothing is raised for bad input: a malformed batch or record is
    collected in ``errors`` and the remaining input is still processed.
    """
    result = NormalizationResult()
    seen = {t.id for t in existing}

    for batch in batches:
        try:
            records = unwrap_batch(batch)
        except ValidationError as exc:
            log.warning("batch_rejected", kind=exc.kind.value, reason=exc.message)
            result.errors.append(exc)
            continue
        for index, record in enumerate(records):
            try:
                trade = normalize_record(record, index=index)
            except ValidationError as exc:
                log.warning(
                    "record_rejected",
                    kind=exc.kind.value,
                    field=exc.field,
                    record_id=exc.record_id,
                    index=index,
                    reason=exc.message,
                )
                result.errors.append(exc)
                continue
            if trade.id in seen:
                result.duplicates += 1
                continue
            seen.add(trade.id)
            result.trades.append(trade)

    log.info(
        "batch_normalized",
        accepted=len(result.trades),
        duplicates=result.duplicates,
        rejected=result.rejected,
    )
    return result
