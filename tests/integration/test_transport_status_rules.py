from __future__ import annotations

import httpx
import pytest

from ftx_rest_client.client import FtxAuthClient, FtxClient
from ftx_rest_client.core.errors import (
    FtxDeserializationError,
    FtxRateLimitError,
    FtxRejectedError,
    FtxRequestExecutionError,
)
from ftx_rest_client.core.transport import SyncTransport
from ftx_rest_client.endpoints.markets import GetMarkets
from ftx_rest_client.endpoints.orders import CancelOrder, OrderId
from tests.shared.payloads import encode, make_error_payload, make_market, make_success_payload
from tests.shared.transport import build_config


def _client_for(handler) -> FtxClient:
    config = build_config()
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return FtxClient(config=config, transport=SyncTransport(config, client=http_client))


def test_http_429_is_rate_limit_error():
    client = _client_for(lambda request: httpx.Response(429, content=b""))
    with pytest.raises(FtxRateLimitError) as exc_info:
        client.execute(GetMarkets())
    assert exc_info.value.http_status == 429


@pytest.mark.parametrize("http_status", [500, 502, 503, 504])
def test_http_5xx_is_execution_error_with_status(http_status):
    client = _client_for(lambda request: httpx.Response(http_status, content=b"oops"))
    with pytest.raises(FtxRequestExecutionError) as exc_info:
        client.execute(GetMarkets())
    assert exc_info.value.http_status == http_status


def test_transport_failure_is_execution_error_without_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client_for(handler)
    with pytest.raises(FtxRequestExecutionError) as exc_info:
        client.execute(GetMarkets())
    assert exc_info.value.http_status is None
    assert exc_info.value.cause == "network"
    assert isinstance(exc_info.value.sources[0], httpx.ConnectError)


@pytest.mark.parametrize("http_status", [400, 401, 404])
def test_http_4xx_with_error_envelope_is_rejected_on_decode(http_status):
    client = _client_for(
        lambda request: httpx.Response(
            http_status,
            content=encode(make_error_payload("Invalid parameter market")),
        )
    )
    response = client.execute(GetMarkets())
    assert response.http_status == http_status
    with pytest.raises(FtxRejectedError) as exc_info:
        response.decode()
    assert exc_info.value.exchange_message == "Invalid parameter market"
    assert exc_info.value.http_status == http_status


def test_http_4xx_with_non_envelope_body_is_deserialization_error():
    client = _client_for(lambda request: httpx.Response(404, content=b"<html>not found</html>"))
    response = client.execute(GetMarkets())
    with pytest.raises(FtxDeserializationError):
        response.decode()


def test_success_round_trip_through_httpx():
    client = _client_for(
        lambda request: httpx.Response(200, content=encode(make_success_payload([make_market()])))
    )
    with client:
        markets = client.execute(GetMarkets()).decode()
    assert markets[0].name == "BTC/USD"


def test_delete_request_is_signed_with_method_and_path(authenticator, fixed_clock):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, content=encode(make_success_payload("Order queued for cancellation"))
        )

    config = build_config()
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    client = FtxAuthClient(
        authenticator,
        config=config,
        transport=SyncTransport(config, client=http_client),
        clock=fixed_clock,
    )
    response = client.execute(CancelOrder(OrderId.client("my-order")))

    assert response.decode() == "Order queued for cancellation"
    assert seen[0].method == "DELETE"
    assert seen[0].url.path == "/api/orders/by_client_id/my-order"
    assert seen[0].headers["FTX-SIGN"] == authenticator.signature(
        fixed_clock(), "DELETE", "/orders/by_client_id/my-order"
    )
