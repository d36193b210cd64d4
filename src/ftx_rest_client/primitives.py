"""Numeric and time primitives shared by endpoint records."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum

from .core.decoding import FieldDecodeError, as_decimal, as_str

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class DecimalError(ValueError):
    """Decimal outside the domain of a constrained decimal type."""

    def __init__(self, message: str, *, constraint: str, value: object) -> None:
        super().__init__(message)
        self.constraint = constraint
        self.value = value


class DecimalParseError(DecimalError):
    """Text could not be parsed as a constrained decimal."""


class InvalidUnixTimestamp(ValueError):
    """Timestamp before the UNIX epoch."""

    def __init__(self, value: object) -> None:
        super().__init__(f"invalid UNIX timestamp {value}")
        self.value = value


def _coerce_decimal(value: Decimal | int | str, *, constraint: str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise DecimalError(f"expected a decimal, got {value!r}", constraint=constraint, value=value)
    if isinstance(value, (int, str)):
        try:
            return Decimal(value)
        except InvalidOperation as exc:
            raise DecimalParseError(
                f"failed to parse {value!r} as a decimal",
                constraint=constraint,
                value=value,
            ) from exc
    raise DecimalError(f"expected a decimal, got {value!r}", constraint=constraint, value=value)


@dataclass(slots=True, frozen=True, order=True)
class PositiveDecimal:
    """Decimal strictly greater than zero, e.g. prices and sizes."""

    value: Decimal

    def __post_init__(self) -> None:
        value = _coerce_decimal(self.value, constraint="positive")
        if not value.is_finite() or value <= 0:
            raise DecimalError(
                f"expected a positive number, got {value}",
                constraint="positive",
                value=value,
            )
        object.__setattr__(self, "value", value)

    @classmethod
    def parse(cls, text: str) -> "PositiveDecimal":
        try:
            return cls(Decimal(text))
        except (InvalidOperation, DecimalError) as exc:
            raise DecimalParseError(
                f"failed to parse {text!r} as a positive decimal",
                constraint="positive",
                value=text,
            ) from exc

    def __add__(self, other: "PositiveDecimal") -> "PositiveDecimal":
        if not isinstance(other, PositiveDecimal):
            return NotImplemented
        return PositiveDecimal(self.value + other.value)

    def __mul__(self, other: "PositiveDecimal") -> "PositiveDecimal":
        if not isinstance(other, PositiveDecimal):
            return NotImplemented
        return PositiveDecimal(self.value * other.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(slots=True, frozen=True, order=True)
class NonNegativeDecimal:
    """Decimal greater than or equal to zero, e.g. volumes and balances."""

    value: Decimal

    def __post_init__(self) -> None:
        value = _coerce_decimal(self.value, constraint="non_negative")
        if not value.is_finite() or value < 0:
            raise DecimalError(
                f"expected a non-negative number, got {value}",
                constraint="non_negative",
                value=value,
            )
        object.__setattr__(self, "value", value)

    @classmethod
    def parse(cls, text: str) -> "NonNegativeDecimal":
        try:
            return cls(Decimal(text))
        except (InvalidOperation, DecimalError) as exc:
            raise DecimalParseError(
                f"failed to parse {text!r} as a non-negative decimal",
                constraint="non_negative",
                value=text,
            ) from exc

    def __add__(self, other: "NonNegativeDecimal") -> "NonNegativeDecimal":
        if not isinstance(other, NonNegativeDecimal):
            return NotImplemented
        return NonNegativeDecimal(self.value + other.value)

    def __mul__(self, other: "NonNegativeDecimal") -> "NonNegativeDecimal":
        if not isinstance(other, NonNegativeDecimal):
            return NotImplemented
        return NonNegativeDecimal(self.value * other.value)

    def __str__(self) -> str:
        return str(self.value)


Price = PositiveDecimal
Size = PositiveDecimal


@dataclass(slots=True, frozen=True, order=True)
class UnixTimestamp:
    """Milliseconds since the UNIX epoch."""

    millis: int

    def __post_init__(self) -> None:
        if isinstance(self.millis, bool) or not isinstance(self.millis, int):
            raise TypeError("millis must be int")
        if self.millis < 0:
            raise InvalidUnixTimestamp(self.millis)

    @classmethod
    def now(cls) -> "UnixTimestamp":
        return cls(time.time_ns() // 1_000_000)

    @classmethod
    def from_millis(cls, millis: float | Decimal) -> "UnixTimestamp":
        """Truncate a (possibly fractional) millisecond count."""

        if millis < 0:
            raise InvalidUnixTimestamp(millis)
        return cls(int(millis))

    @classmethod
    def from_seconds(cls, seconds: float | Decimal) -> "UnixTimestamp":
        if seconds < 0:
            raise InvalidUnixTimestamp(seconds)
        return cls(int(Decimal(str(seconds)) * 1000))

    @classmethod
    def from_datetime(cls, value: datetime) -> "UnixTimestamp":
        if value.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")
        delta = value - _EPOCH
        millis = (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000
        if millis < 0:
            raise InvalidUnixTimestamp(millis)
        return cls(millis)

    def __int__(self) -> int:
        return self.millis

    def __str__(self) -> str:
        return str(self.millis)


class Side(str, Enum):
    """Trade or order direction."""

    BUY = "buy"
    SELL = "sell"


class WindowLength(int, Enum):
    """Candle resolution in seconds."""

    FIFTEEN_SECONDS = 15
    ONE_MINUTE = 60
    FIVE_MINUTES = 300
    FIFTEEN_MINUTES = 900
    ONE_HOUR = 3600
    FOUR_HOURS = 14400
    ONE_DAY = 86400

    @staticmethod
    def days(count: int) -> int:
        """Resolution in seconds for a multiple of one day (max 30)."""

        if isinstance(count, bool) or not isinstance(count, int) or not 1 <= count <= 30:
            raise ValueError("day multiple must be between 1 and 30")
        return 86400 * count


def as_positive_decimal(value: object) -> PositiveDecimal:
    return PositiveDecimal(as_decimal(value))


def as_non_negative_decimal(value: object) -> NonNegativeDecimal:
    return NonNegativeDecimal(as_decimal(value))


def as_unix_timestamp(value: object) -> UnixTimestamp:
    """Millisecond timestamps; the exchange sometimes sends them as floats."""

    return UnixTimestamp.from_millis(as_decimal(value))


def as_datetime(value: object) -> datetime:
    text = as_str(value)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise FieldDecodeError(f"failed to parse {text!r} as a datetime") from exc
    if parsed.tzinfo is None:
        raise FieldDecodeError(f"datetime {text!r} has no UTC offset")
    return parsed


__all__ = [
    "DecimalError",
    "DecimalParseError",
    "InvalidUnixTimestamp",
    "PositiveDecimal",
    "NonNegativeDecimal",
    "Price",
    "Size",
    "UnixTimestamp",
    "Side",
    "WindowLength",
    "as_positive_decimal",
    "as_non_negative_decimal",
    "as_unix_timestamp",
    "as_datetime",
]
