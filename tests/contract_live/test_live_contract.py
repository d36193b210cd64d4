from __future__ import annotations

import os

import pytest

from ftx_rest_client import Authenticator, FtxAuthClient, FtxClient, FtxClientConfig
from ftx_rest_client.endpoints import BookDepth, GetMarkets, GetOrderBook, GetPositions


pytestmark = pytest.mark.live


def _require_live_flag() -> None:
    if os.getenv("FTX_RUN_LIVE") != "1":
        pytest.skip("Set FTX_RUN_LIVE=1 to run live contract tests")


def _live_config() -> FtxClientConfig:
    cfg = FtxClientConfig(base_url=os.getenv("FTX_BASE_URL", FtxClientConfig().base_url))
    cfg.validate()
    return cfg


def test_live_get_markets_contract_minimum():
    _require_live_flag()
    with FtxClient(config=_live_config()) as client:
        response = client.execute(GetMarkets(), timeout=10.0)

    partial = response.decode_partial()
    assert len(partial) > 0
    assert all(isinstance(market.name.decode(), str) for market in list(partial)[:5])


def test_live_get_order_book_contract_minimum():
    _require_live_flag()
    with FtxClient(config=_live_config()) as client:
        book = client.execute(GetOrderBook("BTC/USD", depth=BookDepth(5))).decode()

    assert len(book.asks) <= 5
    assert len(book.bids) <= 5


def test_live_private_endpoint_contract_minimum():
    _require_live_flag()
    public_key = os.getenv("FTX_API_KEY")
    private_key = os.getenv("FTX_API_SECRET")
    if not public_key or not private_key:
        pytest.skip("Set FTX_API_KEY and FTX_API_SECRET to run private live tests")

    authenticator = Authenticator(public_key, private_key, os.getenv("FTX_SUBACCOUNT"))
    with FtxAuthClient(authenticator, config=_live_config()) as client:
        positions = client.execute(GetPositions(show_avg_price=True)).decode_partial()

    for position in positions:
        assert isinstance(position.future.decode(), str)
