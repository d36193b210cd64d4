from __future__ import annotations

import json
from decimal import Decimal

import pytest

from ftx_rest_client.core.errors import (
    ErrorKind,
    FtxDeserializationError,
    FtxRejectedError,
)
from ftx_rest_client.core.models import Failure, Success, unwrap_payload
from ftx_rest_client.core.response_parsing import (
    EnvelopeShapeError,
    load_json,
    parse_envelope,
    parse_failure_shape,
    parse_success_shape,
)
from tests.shared.payloads import encode, make_error_payload, make_success_payload


def test_success_envelope_yields_result_payload():
    envelope = parse_envelope(encode(make_success_payload([{"coin": "BTC"}])))
    assert envelope == Success([{"coin": "BTC"}])


def test_success_envelope_keeps_numbers_as_decimal():
    envelope = parse_envelope(b'{"success": true, "result": {"price": 0.1}}')
    assert isinstance(envelope, Success)
    assert envelope.payload == {"price": Decimal("0.1")}


def test_success_envelope_with_null_result_is_empty_payload():
    envelope = parse_envelope(b'{"success": true, "result": null}')
    assert envelope == Success(None)


def test_failure_envelope_yields_message():
    envelope = parse_envelope(encode(make_error_payload("Not logged in")))
    assert envelope == Failure("Not logged in")


def test_failure_envelope_with_null_result_is_failure():
    envelope = parse_envelope(b'{"success": false, "result": null, "error": "Order not found"}')
    assert envelope == Failure("Order not found")


@pytest.mark.parametrize(
    "document",
    [
        {"success": True, "result": [1]},
        {"result": None},
        {"success": False, "error": "x"},
        {"error": "x", "result": None},
    ],
)
def test_success_and_failure_shapes_are_disjoint(document):
    matches = 0
    for parser in (parse_success_shape, parse_failure_shape):
        try:
            parser(document)
        except EnvelopeShapeError:
            continue
        matches += 1
    assert matches == 1


@pytest.mark.parametrize(
    "document",
    [
        {"success": True},
        {"success": False, "error": 42},
        {"result": [1], "error": "both set"},
        [1, 2, 3],
    ],
    ids=["no-result-no-error", "non-string-error", "result-and-error", "array-root"],
)
def test_neither_shape_retains_both_causes(document):
    with pytest.raises(FtxDeserializationError) as exc_info:
        parse_envelope(json.dumps(document).encode("utf-8"), http_status=200)
    err = exc_info.value
    assert err.kind is ErrorKind.DESERIALIZATION_FAILED
    assert err.cause == "envelope"
    assert err.http_status == 200
    assert len(err.sources) == 2
    assert all(isinstance(source, EnvelopeShapeError) for source in err.sources)


def test_invalid_json_is_deserialization_error_with_json_cause():
    with pytest.raises(FtxDeserializationError) as exc_info:
        load_json(b"<html>bad gateway</html>")
    assert exc_info.value.cause == "json"
    assert isinstance(exc_info.value.sources[0], ValueError)


def test_unwrap_failure_raises_rejected_with_exchange_message():
    with pytest.raises(FtxRejectedError) as exc_info:
        unwrap_payload(Failure("Invalid parameter market"), http_status=400)
    err = exc_info.value
    assert err.exchange_message == "Invalid parameter market"
    assert str(err) == "Invalid parameter market"
    assert err.http_status == 400


def test_unwrap_success_returns_payload():
    assert unwrap_payload(Success({"a": 1})) == {"a": 1}
