"""Field decoders, lazy fields and record payload shapes.

Two decode paths exist for every payload:

* strict: the whole payload is turned into typed records in one pass and
  the first field that does not decode fails the call;
* partial: only the payload structure is checked, each field keeps its raw
  JSON node and is decoded on request, so one malformed field does not hide
  the others.

``partial.to_strict()`` must equal the strict result for any valid payload.
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from .errors import FtxDeserializationError

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=Enum)
R = TypeVar("R", bound="Record")

Decoder = Callable[[object], T]

_FIELD_SPEC = "ftx_field_spec"

# Unknown-key policy for records nested inside the one being decoded.
_DENY_UNKNOWN_FIELDS: ContextVar[bool] = ContextVar("ftx_deny_unknown_fields", default=False)


@contextmanager
def _unknown_fields_policy(deny_unknown_fields: bool) -> Iterator[None]:
    token = _DENY_UNKNOWN_FIELDS.set(deny_unknown_fields)
    try:
        yield
    finally:
        _DENY_UNKNOWN_FIELDS.reset(token)


class FieldDecodeError(ValueError):
    """A JSON node does not match the expected field type."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


def _type_name(value: object) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, Decimal)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def as_str(value: object) -> str:
    if not isinstance(value, str):
        raise FieldDecodeError(f"expected string, got {_type_name(value)}")
    return value


def as_bool(value: object) -> bool:
    if not isinstance(value, bool):
        raise FieldDecodeError(f"expected bool, got {_type_name(value)}")
    return value


def as_int(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise FieldDecodeError(f"expected integer, got {_type_name(value)}")
    return value


def as_decimal(value: object) -> Decimal:
    if isinstance(value, bool):
        raise FieldDecodeError("expected number, got bool")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    raise FieldDecodeError(f"expected number, got {_type_name(value)}")


def enum_of(enum_type: type[E]) -> Decoder[E]:
    def _decode(value: object) -> E:
        try:
            return enum_type(as_str(value))
        except ValueError as exc:
            raise FieldDecodeError(f"unknown {enum_type.__name__} value {value!r}") from exc

    return _decode


def optional(decoder: Decoder[T]) -> Decoder[T | None]:
    def _decode(value: object) -> T | None:
        if value is None:
            return None
        return decoder(value)

    return _decode


def list_of(decoder: Decoder[T]) -> Decoder[tuple[T, ...]]:
    def _decode(value: object) -> tuple[T, ...]:
        if not isinstance(value, list):
            raise FieldDecodeError(f"expected array, got {_type_name(value)}")
        items: list[T] = []
        for index, item in enumerate(value):
            try:
                items.append(decoder(item))
            except ValueError as exc:
                raise FieldDecodeError(f"element {index}: {exc}") from exc
        return tuple(items)

    return _decode


def pair_of(first: Decoder[T], second: Decoder[U]) -> Decoder[tuple[T, U]]:
    def _decode(value: object) -> tuple[T, U]:
        if not isinstance(value, list) or len(value) != 2:
            raise FieldDecodeError(f"expected array of length 2, got {_type_name(value)}")
        return first(value[0]), second(value[1])

    return _decode


def record_of(record_type: type[R]) -> Decoder[R]:
    """Decoder for a record nested in another record's field.

    The nested record follows the unknown-key policy of the payload it was
    read from.
    """

    def _decode(value: object) -> R:
        return record_type.from_json(value, deny_unknown_fields=_DENY_UNKNOWN_FIELDS.get())

    return _decode


@dataclasses.dataclass(slots=True, frozen=True)
class FieldSpec:
    name: str
    key: str
    decoder: Decoder[Any]
    optional: bool


def json_field(key: str, decoder: Decoder[Any], *, optional: bool = False) -> Any:
    """Declare a record field read from JSON key ``key``.

    Optional fields accept both ``null`` and a missing key and decode to
    ``None``; required fields must be present.
    """

    return dataclasses.field(metadata={_FIELD_SPEC: (key, decoder, optional)})


class Lazy(Generic[T]):
    """Still-undecoded JSON node of a single field."""

    __slots__ = ("_raw", "_decoder", "_field", "_deny_unknown_fields")

    def __init__(
        self,
        raw: object,
        decoder: Decoder[T],
        *,
        field: str | None = None,
        deny_unknown_fields: bool = False,
    ) -> None:
        self._raw = raw
        self._decoder = decoder
        self._field = field
        self._deny_unknown_fields = deny_unknown_fields

    @property
    def raw(self) -> object:
        return self._raw

    @property
    def field(self) -> str | None:
        return self._field

    def decode(self) -> T:
        try:
            with _unknown_fields_policy(self._deny_unknown_fields):
                return self._decoder(self._raw)
        except ValueError as exc:
            label = f"field {self._field!r}" if self._field else "value"
            raise FtxDeserializationError(
                f"failed to decode {label}: {exc}",
                field=self._field,
                cause="field",
                sources=(exc,),
            ) from exc

    def to_strict(self) -> T:
        return self.decode()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field={self._field!r}, raw={self._raw!r})"


class OptionalLazy(Lazy[T | None]):
    """Lazy field that tolerates ``null`` or a missing key."""

    __slots__ = ()

    def __init__(
        self,
        raw: object,
        decoder: Decoder[T],
        *,
        field: str | None = None,
        deny_unknown_fields: bool = False,
    ) -> None:
        super().__init__(
            raw, optional(decoder), field=field, deny_unknown_fields=deny_unknown_fields
        )

    @property
    def is_present(self) -> bool:
        return self._raw is not None


def _check_object(value: object, record_type: type) -> dict[str, object]:
    if not isinstance(value, dict):
        raise FieldDecodeError(
            f"expected object for {record_type.__name__}, got {_type_name(value)}"
        )
    return value


def _check_unknown_keys(
    document: Mapping[str, object],
    specs: Sequence[FieldSpec],
    record_type: type,
) -> None:
    known = {spec.key for spec in specs}
    unknown = sorted(key for key in document if key not in known)
    if unknown:
        raise FieldDecodeError(
            f"unknown field(s) for {record_type.__name__}: {', '.join(unknown)}"
        )


class Record:
    """Base for frozen dataclass records decoded from exchange JSON."""

    __slots__ = ()

    _json_fields: ClassVar[tuple[FieldSpec, ...] | None] = None

    @classmethod
    def json_fields(cls) -> tuple[FieldSpec, ...]:
        cached = cls.__dict__.get("_json_fields")
        if cached is not None:
            return cached
        specs: list[FieldSpec] = []
        for item in dataclasses.fields(cls):  # type: ignore[arg-type]
            key, decoder, is_optional = item.metadata[_FIELD_SPEC]
            specs.append(FieldSpec(item.name, key, decoder, is_optional))
        resolved = tuple(specs)
        cls._json_fields = resolved
        return resolved

    @classmethod
    def from_json(cls: type[R], value: object, *, deny_unknown_fields: bool = False) -> R:
        document = _check_object(value, cls)
        specs = cls.json_fields()
        if deny_unknown_fields:
            _check_unknown_keys(document, specs, cls)
        values: dict[str, object] = {}
        for spec in specs:
            if spec.key not in document and not spec.optional:
                raise FieldDecodeError(f"missing field {spec.key!r}", field=spec.key)
            raw = document.get(spec.key)
            decoder = optional(spec.decoder) if spec.optional else spec.decoder
            try:
                with _unknown_fields_policy(deny_unknown_fields):
                    values[spec.name] = decoder(raw)
            except ValueError as exc:
                raise FieldDecodeError(f"field {spec.key!r}: {exc}", field=spec.key) from exc
        return cls(**values)

    @classmethod
    def partial_from_json(
        cls: type[R],
        value: object,
        *,
        deny_unknown_fields: bool = False,
    ) -> "PartialRecord[R]":
        document = _check_object(value, cls)
        specs = cls.json_fields()
        if deny_unknown_fields:
            _check_unknown_keys(document, specs, cls)
        fields: dict[str, Lazy[Any]] = {}
        for spec in specs:
            if spec.optional:
                fields[spec.name] = OptionalLazy(
                    document.get(spec.key),
                    spec.decoder,
                    field=spec.key,
                    deny_unknown_fields=deny_unknown_fields,
                )
                continue
            if spec.key not in document:
                raise FieldDecodeError(f"missing field {spec.key!r}", field=spec.key)
            fields[spec.name] = Lazy(
                document[spec.key],
                spec.decoder,
                field=spec.key,
                deny_unknown_fields=deny_unknown_fields,
            )
        return PartialRecord(cls, fields)


class PartialRecord(Generic[R]):
    """Record whose fields are decoded one at a time on request."""

    __slots__ = ("_record_type", "_fields")

    def __init__(self, record_type: type[R], fields: Mapping[str, Lazy[Any]]) -> None:
        self._record_type = record_type
        self._fields = dict(fields)

    @property
    def record_type(self) -> type[R]:
        return self._record_type

    def field_names(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def field(self, name: str) -> Lazy[Any]:
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(
                f"{self._record_type.__name__} has no field {name!r}"
            ) from None

    def __getattr__(self, name: str) -> Lazy[Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.field(name)

    def decode_field(self, name: str) -> Any:
        return self.field(name).decode()

    def decode_available(self) -> tuple[dict[str, Any], dict[str, FtxDeserializationError]]:
        """Decode every field, collecting per-field failures instead of raising."""

        decoded: dict[str, Any] = {}
        errors: dict[str, FtxDeserializationError] = {}
        for name, lazy in self._fields.items():
            try:
                decoded[name] = lazy.decode()
            except FtxDeserializationError as exc:
                errors[name] = exc
        return decoded, errors

    def to_strict(self) -> R:
        values = {name: lazy.decode() for name, lazy in self._fields.items()}
        return self._record_type(**values)

    def __repr__(self) -> str:
        return f"PartialRecord({self._record_type.__name__}, fields={list(self._fields)})"


class PartialRecordList(Generic[R]):
    """Sequence of partial records from an array payload."""

    __slots__ = ("_items",)

    def __init__(self, items: Sequence[PartialRecord[R]]) -> None:
        self._items = tuple(items)

    def __iter__(self) -> Iterator[PartialRecord[R]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> PartialRecord[R]:
        return self._items[index]

    def to_strict(self) -> tuple[R, ...]:
        return tuple(item.to_strict() for item in self._items)

    def __repr__(self) -> str:
        return f"PartialRecordList({list(self._items)!r})"


P = TypeVar("P")


class Payload(ABC, Generic[T, P]):
    """Shape of the ``result`` payload for one endpoint."""

    @abstractmethod
    def decode(self, value: object, *, deny_unknown_fields: bool = False) -> T: ...

    @abstractmethod
    def decode_partial(self, value: object, *, deny_unknown_fields: bool = False) -> P: ...


class RecordPayload(Payload[R, PartialRecord[R]]):
    def __init__(self, record_type: type[R]) -> None:
        self.record_type = record_type

    def decode(self, value: object, *, deny_unknown_fields: bool = False) -> R:
        return self.record_type.from_json(value, deny_unknown_fields=deny_unknown_fields)

    def decode_partial(
        self,
        value: object,
        *,
        deny_unknown_fields: bool = False,
    ) -> PartialRecord[R]:
        return self.record_type.partial_from_json(value, deny_unknown_fields=deny_unknown_fields)


class RecordListPayload(Payload[tuple[R, ...], PartialRecordList[R]]):
    def __init__(self, record_type: type[R]) -> None:
        self.record_type = record_type

    def _items(self, value: object) -> list[object]:
        if not isinstance(value, list):
            raise FieldDecodeError(f"expected array, got {_type_name(value)}")
        return value

    def decode(self, value: object, *, deny_unknown_fields: bool = False) -> tuple[R, ...]:
        records: list[R] = []
        for index, item in enumerate(self._items(value)):
            try:
                records.append(
                    self.record_type.from_json(item, deny_unknown_fields=deny_unknown_fields)
                )
            except FieldDecodeError as exc:
                raise FieldDecodeError(f"element {index}: {exc}", field=exc.field) from exc
        return tuple(records)

    def decode_partial(
        self,
        value: object,
        *,
        deny_unknown_fields: bool = False,
    ) -> PartialRecordList[R]:
        return PartialRecordList(
            [
                self.record_type.partial_from_json(item, deny_unknown_fields=deny_unknown_fields)
                for item in self._items(value)
            ]
        )


class ValuePayload(Payload[T, Lazy[T]]):
    """Scalar payload such as an acknowledgement message."""

    def __init__(self, decoder: Decoder[T]) -> None:
        self.decoder = decoder

    def decode(self, value: object, *, deny_unknown_fields: bool = False) -> T:
        with _unknown_fields_policy(deny_unknown_fields):
            return self.decoder(value)

    def decode_partial(self, value: object, *, deny_unknown_fields: bool = False) -> Lazy[T]:
        return Lazy(value, self.decoder, deny_unknown_fields=deny_unknown_fields)


def _as_empty(value: object) -> None:
    if value is not None:
        raise FieldDecodeError(f"expected null, got {_type_name(value)}")
    return None


class EmptyPayload(ValuePayload[None]):
    """Endpoints whose success payload is ``null``."""

    def __init__(self) -> None:
        super().__init__(_as_empty)


__all__ = [
    "Decoder",
    "FieldDecodeError",
    "as_str",
    "as_bool",
    "as_int",
    "as_decimal",
    "enum_of",
    "optional",
    "list_of",
    "pair_of",
    "record_of",
    "FieldSpec",
    "json_field",
    "Lazy",
    "OptionalLazy",
    "Record",
    "PartialRecord",
    "PartialRecordList",
    "Payload",
    "RecordPayload",
    "RecordListPayload",
    "ValuePayload",
    "EmptyPayload",
]
