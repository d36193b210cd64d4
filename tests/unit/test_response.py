from __future__ import annotations

from decimal import Decimal

import pytest

from ftx_rest_client.core.errors import FtxDeserializationError, FtxRejectedError
from ftx_rest_client.core.models import Failure, Success
from ftx_rest_client.endpoints.account import (
    ChangeAccountLeverageResponse,
    GetAccountInformationResponse,
)
from ftx_rest_client.endpoints.markets import GetMarketsResponse
from ftx_rest_client.endpoints.orders import CancelOrderResponse, GetOrderStatusResponse
from ftx_rest_client.endpoints.spot_margin import GetBorrowRatesResponse
from tests.shared.payloads import (
    encode,
    make_account_information,
    make_borrow_rate,
    make_error_payload,
    make_market,
    make_order,
    make_position,
    make_success_payload,
)


def test_decode_and_decode_partial_are_repeatable():
    response = GetMarketsResponse(encode(make_success_payload([make_market()])))
    first = response.decode()
    second = response.decode()
    assert first == second
    assert response.decode_partial().to_strict() == first
    assert first[0].name == "BTC/USD"


def test_envelope_is_exposed():
    response = CancelOrderResponse(encode(make_success_payload("Order queued for cancellation")))
    assert response.envelope() == Success("Order queued for cancellation")
    assert response.decode() == "Order queued for cancellation"
    assert response.decode_partial().decode() == "Order queued for cancellation"


def test_failure_envelope_decodes_to_rejected():
    response = GetOrderStatusResponse(encode(make_error_payload("Order not found")), http_status=404)
    assert response.envelope() == Failure("Order not found")
    with pytest.raises(FtxRejectedError) as exc_info:
        response.decode()
    assert exc_info.value.http_status == 404
    with pytest.raises(FtxRejectedError):
        response.decode_partial()


def test_strict_field_failure_is_wrapped_as_deserialization_error():
    response = GetOrderStatusResponse(encode(make_success_payload(make_order(side="up"))))
    with pytest.raises(FtxDeserializationError) as exc_info:
        response.decode()
    err = exc_info.value
    assert err.cause == "payload"
    assert err.field == "side"
    assert err.sources


def test_partial_decode_survives_the_same_failure():
    response = GetOrderStatusResponse(encode(make_success_payload(make_order(side="up"))))
    partial = response.decode_partial()
    assert partial.market.decode() == "XRP-PERP"
    with pytest.raises(FtxDeserializationError):
        partial.side.decode()


def test_deny_unknown_fields_is_applied_per_response():
    content = encode(make_success_payload([make_borrow_rate(extra=1)]))
    assert GetBorrowRatesResponse(content).decode()[0].estimate == Decimal("0.00000145")
    strict = GetBorrowRatesResponse(content, deny_unknown_fields=True)
    with pytest.raises(FtxDeserializationError, match="extra"):
        strict.decode()
    with pytest.raises(FtxDeserializationError, match="extra"):
        strict.decode_partial()


def test_deny_unknown_fields_is_applied_to_nested_positions():
    content = encode(
        make_success_payload(make_account_information(positions=[make_position(surprise=1)]))
    )
    assert GetAccountInformationResponse(content).decode().positions[0].future == "ETH-PERP"

    strict = GetAccountInformationResponse(content, deny_unknown_fields=True)
    with pytest.raises(FtxDeserializationError, match="surprise") as exc_info:
        strict.decode()
    assert exc_info.value.field == "positions"

    partial = strict.decode_partial()
    assert partial.username.decode() == "user@domain.com"
    with pytest.raises(FtxDeserializationError, match="surprise"):
        partial.positions.decode()


def test_empty_success_payload():
    response = ChangeAccountLeverageResponse(b'{"success": true, "result": null}')
    assert response.decode() is None
    assert response.decode_partial().decode() is None


def test_malformed_body_is_deserialization_error():
    with pytest.raises(FtxDeserializationError):
        GetMarketsResponse(b"").decode()
