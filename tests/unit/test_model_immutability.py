from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from ftx_rest_client.core.models import Failure, Success
from ftx_rest_client.core.response_parsing import load_json
from ftx_rest_client.endpoints.markets import GetMarket, GetMarketsResponse, Trade
from ftx_rest_client.primitives import UnixTimestamp
from tests.shared.payloads import encode, make_success_payload, make_trade


def test_records_are_frozen():
    trade = Trade.from_json(load_json(encode(make_trade())))
    with pytest.raises(FrozenInstanceError):
        trade.id = 1  # type: ignore[misc]


def test_requests_are_frozen_and_hashable():
    request = GetMarket("BTC-PERP")
    with pytest.raises(FrozenInstanceError):
        request.market = "ETH-PERP"  # type: ignore[misc]
    assert hash(request) == hash(GetMarket("BTC-PERP"))


def test_envelope_models_and_timestamps_are_frozen():
    with pytest.raises(FrozenInstanceError):
        Success([]).payload = None  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        Failure("x").message = "y"  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        UnixTimestamp(1).millis = 2  # type: ignore[misc]


def test_response_holds_bytes_and_rejects_new_attributes():
    content = encode(make_success_payload([]))
    response = GetMarketsResponse(content, http_status=200)
    assert response.content == content
    assert response.http_status == 200
    with pytest.raises(AttributeError):
        response.extra = 1  # type: ignore[attr-defined]
