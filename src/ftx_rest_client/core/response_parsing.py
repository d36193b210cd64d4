"""Envelope parsing shared by every response type."""

from __future__ import annotations

import json
from collections.abc import Mapping
from decimal import Decimal

from .errors import FtxDeserializationError
from .models import Envelope, Failure, Success


class EnvelopeShapeError(ValueError):
    """Response JSON does not have the expected envelope shape."""


def load_json(content: bytes, *, http_status: int | None = None) -> object:
    """Parse response bytes, keeping JSON numbers with fractions as ``Decimal``."""

    try:
        return json.loads(content, parse_float=Decimal)
    except ValueError as exc:
        raise FtxDeserializationError(
            "response body is not valid JSON",
            http_status=http_status,
            cause="json",
            sources=(exc,),
        ) from exc


def _as_object(document: object) -> Mapping[str, object]:
    if not isinstance(document, dict):
        raise EnvelopeShapeError("response JSON root must be an object")
    return document


def parse_success_shape(document: object) -> Success:
    """``{"result": <payload or null>}`` with no error attached."""

    payload = _as_object(document)
    if "result" not in payload:
        raise EnvelopeShapeError("missing 'result' field")
    if payload.get("error") is not None:
        raise EnvelopeShapeError("'error' field is set")
    if payload.get("success") is False:
        raise EnvelopeShapeError("'success' field is false")
    return Success(payload["result"])


def parse_failure_shape(document: object) -> Failure:
    """``{"error": <string>}`` with no result attached."""

    payload = _as_object(document)
    message = payload.get("error")
    if not isinstance(message, str):
        raise EnvelopeShapeError("'error' field must be a string")
    if payload.get("result") is not None:
        raise EnvelopeShapeError("'result' field is set")
    if payload.get("success") is True:
        raise EnvelopeShapeError("'success' field is true")
    return Failure(message)


def parse_envelope(content: bytes, *, http_status: int | None = None) -> Envelope:
    """Try the success shape, then the failure shape."""

    document = load_json(content, http_status=http_status)
    try:
        return parse_success_shape(document)
    except EnvelopeShapeError as success_exc:
        try:
            return parse_failure_shape(document)
        except EnvelopeShapeError as failure_exc:
            raise FtxDeserializationError(
                f"response matches neither envelope shape "
                f"(success: {success_exc}; failure: {failure_exc})",
                http_status=http_status,
                cause="envelope",
                sources=(success_exc, failure_exc),
            ) from failure_exc


__all__ = [
    "EnvelopeShapeError",
    "load_json",
    "parse_success_shape",
    "parse_failure_shape",
    "parse_envelope",
]
