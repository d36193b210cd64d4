"""Request/response contract implemented by every endpoint.

Requests declare their method, path and payload once; responses hold the raw
body and know how to decode it.  Whether a request needs signing is part of
its type: ``PublicRequest`` subclasses can go through any client, while
``PrivateRequest`` subclasses are only accepted by authenticated clients.

Both hierarchies are closed: only modules of this package may define
request and response types.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from .decoding import FieldDecodeError, Payload
from .errors import FtxDeserializationError, FtxInvalidPayloadError
from .models import Envelope, unwrap_payload
from .response_parsing import parse_envelope

QueryParams = Sequence[tuple[str, str]]

T = TypeVar("T")
P = TypeVar("P")
ResponseT = TypeVar("ResponseT", bound="Response[Any, Any]")

_PACKAGE = __name__.split(".", 1)[0]


def _ensure_internal(cls: type, base: str) -> None:
    module = cls.__module__
    if module != _PACKAGE and not module.startswith(_PACKAGE + "."):
        raise TypeError(f"{cls.__qualname__} cannot extend {base}; {base} types are closed")


def _decimal_literal(value: Decimal) -> str:
    if not value.is_finite():
        raise ValueError(f"non-finite decimal {value} is not JSON serializable")
    if value == value.to_integral_value():
        return str(int(value))
    return str(value)


def _dump_json(value: object) -> str:
    """Serialize a request payload; decimals keep every digit as JSON numbers."""

    if isinstance(value, Decimal):
        return _decimal_literal(value)
    if isinstance(value, Enum):
        return _dump_json(value.value)
    if isinstance(value, Mapping):
        members = []
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"keys must be str, not {type(key).__name__}")
            members.append(f"{json.dumps(key)}: {_dump_json(item)}")
        return "{" + ", ".join(members) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_dump_json(item) for item in value) + "]"
    return json.dumps(value, allow_nan=False)


class Response(Generic[T, P]):
    """Raw response body plus its strict and partial decode targets."""

    __slots__ = ("_content", "_http_status", "_deny_unknown_fields")

    PAYLOAD: ClassVar[Payload[Any, Any]]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        _ensure_internal(cls, "Response")

    def __init__(
        self,
        content: bytes,
        *,
        http_status: int | None = None,
        deny_unknown_fields: bool = False,
    ) -> None:
        self._content = bytes(content)
        self._http_status = http_status
        self._deny_unknown_fields = deny_unknown_fields

    @property
    def content(self) -> bytes:
        return self._content

    @property
    def http_status(self) -> int | None:
        return self._http_status

    def envelope(self) -> Envelope:
        return parse_envelope(self._content, http_status=self._http_status)

    def _payload(self) -> object:
        return unwrap_payload(self.envelope(), http_status=self._http_status)

    def decode(self) -> T:
        """Decode the whole payload; any field mismatch fails the call."""

        payload = self._payload()
        try:
            return self.PAYLOAD.decode(payload, deny_unknown_fields=self._deny_unknown_fields)
        except FieldDecodeError as exc:
            raise FtxDeserializationError(
                f"failed to decode payload: {exc}",
                field=exc.field,
                http_status=self._http_status,
                cause="payload",
                sources=(exc,),
            ) from exc

    def decode_partial(self) -> P:
        """Decode the payload structure only; fields decode on request."""

        payload = self._payload()
        try:
            return self.PAYLOAD.decode_partial(
                payload,
                deny_unknown_fields=self._deny_unknown_fields,
            )
        except FieldDecodeError as exc:
            raise FtxDeserializationError(
                f"failed to decode payload structure: {exc}",
                field=exc.field,
                http_status=self._http_status,
                cause="payload",
                sources=(exc,),
            ) from exc

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(http_status={self._http_status!r}, "
            f"content={self._content[:64]!r})"
        )


class Request(Generic[ResponseT]):
    """Base for endpoint requests."""

    __slots__ = ()

    PATH: ClassVar[str]
    METHOD: ClassVar[str] = "GET"
    RESPONSE: ClassVar[type[Response[Any, Any]]]
    AUTH: ClassVar[bool]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        _ensure_internal(cls, "Request")
        markers = {base for base in cls.__mro__ if "_AUTH_MARKER" in base.__dict__}
        if len(markers) > 1:
            raise TypeError(f"{cls.__qualname__} cannot be both public and private")

    def path(self) -> str:
        return self.PATH

    def query_params(self) -> QueryParams | None:
        return None

    def to_json(self) -> object | None:
        """JSON-compatible body, or ``None`` for bodyless requests."""

        return None

    def body(self) -> str | None:
        payload = self.to_json()
        if payload is None:
            return None
        try:
            return _dump_json(payload)
        except (TypeError, ValueError) as exc:
            raise FtxInvalidPayloadError(
                f"failed to serialize {type(self).__name__} payload",
                cause="json",
                sources=(exc,),
            ) from exc


class PublicRequest(Request[ResponseT]):
    """Request that needs no signature."""

    __slots__ = ()

    _AUTH_MARKER = True
    AUTH = False


class PrivateRequest(Request[ResponseT]):
    """Request that must be signed by an authenticator."""

    __slots__ = ()

    _AUTH_MARKER = True
    AUTH = True


__all__ = [
    "QueryParams",
    "Response",
    "Request",
    "PublicRequest",
    "PrivateRequest",
]
