"""Exception types raised by the engine and its configuration layer."""

from __future__ import annotations

from enum import Enum


class DualTrackerError(Exception):
    """Base class for all errors raised by dual_tracker."""


class ValidationErrorKind(str, Enum):
    MISSING_FIELD = "MissingField"
    UNPARSABLE_NUMBER = "UnparsableNumber"
    UNPARSABLE_TIMESTAMP = "UnparsableTimestamp"
    INVALID_VALUE = "InvalidValue"
    INCONSISTENT_STATUS = "InconsistentStatus"
    MALFORMED_BATCH = "MalformedBatch"


class ValidationError(DualTrackerError):
    """A raw record (or a whole batch) could not be turned into a Trade."""

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        *,
        field: str | None = None,
        record_id: str | None = None,
        index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.field = field
        self.record_id = record_id
        self.index = index

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "field": self.field,
            "recordId": self.record_id,
            "index": self.index,
        }

    def __repr__(self) -> str:
        return (
            f"ValidationError(kind={self.kind.value}, field={self.field!r}, "
            f"record_id={self.record_id!r}, index={self.index!r})"
        )


class ConfigError(DualTrackerError):
    """An aggregation request or config file carried an unrecognised value."""
