from __future__ import annotations

from decimal import Decimal

import pytest

from ftx_rest_client.async_client import AsyncFtxAuthClient
from ftx_rest_client.client import FtxAuthClient
from ftx_rest_client.core.async_transport import AsyncTransport
from ftx_rest_client.core.transport import SyncTransport
from ftx_rest_client.endpoints.account import ChangeAccountLeverage, GetPositions
from ftx_rest_client.endpoints.markets import GetCandles
from ftx_rest_client.endpoints.orders import GetOrderHistory, PlaceOrder
from ftx_rest_client.primitives import PositiveDecimal, Side, UnixTimestamp, WindowLength
from tests.shared.payloads import make_success_payload
from tests.shared.transport import (
    AsyncSequencedClient,
    SyncSequencedClient,
    build_config,
    json_response,
)

REQUESTS = [
    GetCandles("BTC-PERP", WindowLength.FIFTEEN_MINUTES, start_time=UnixTimestamp(1)),
    GetOrderHistory(market="BTC-PERP", side=Side.SELL),
    GetPositions(show_avg_price=False),
    PlaceOrder(
        market="ETH/USD",
        side=Side.BUY,
        size=PositiveDecimal(Decimal("0.25")),
        price=PositiveDecimal(Decimal("1800.5")),
        client_id="abc",
        reduce_only=False,
    ),
    ChangeAccountLeverage(5),
]


def _snapshot(request):
    return (
        request.method,
        str(request.url),
        request.content,
        sorted((key, value) for key, value in request.headers.items()),
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("request_value", REQUESTS, ids=lambda value: type(value).__name__)
async def test_sync_and_async_clients_send_identical_requests(
    request_value, subaccount_authenticator, fixed_clock
):
    config = build_config()
    sync_fake = SyncSequencedClient([json_response(200, make_success_payload(None))])
    async_fake = AsyncSequencedClient([json_response(200, make_success_payload(None))])

    with FtxAuthClient(
        subaccount_authenticator,
        config=config,
        transport=SyncTransport(config, client=sync_fake),
        clock=fixed_clock,
    ) as sync_client:
        sync_response = sync_client.execute(request_value)

    async with AsyncFtxAuthClient(
        subaccount_authenticator,
        config=config,
        transport=AsyncTransport(config, client=async_fake),
        clock=fixed_clock,
    ) as async_client:
        async_response = await async_client.execute(request_value)

    assert _snapshot(sync_fake.requests[0]) == _snapshot(async_fake.requests[0])
    assert sync_response.content == async_response.content
    assert type(sync_response) is type(async_response) is request_value.RESPONSE
