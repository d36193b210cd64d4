"""Market data endpoints (public)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from ..core.decoding import (
    PartialRecord,
    PartialRecordList,
    Record,
    RecordListPayload,
    RecordPayload,
    as_bool,
    as_decimal,
    as_int,
    as_str,
    enum_of,
    json_field,
    list_of,
    pair_of,
)
from ..core.request import PublicRequest, QueryParams, Response
from ..primitives import (
    NonNegativeDecimal,
    Price,
    Side,
    Size,
    UnixTimestamp,
    WindowLength,
    as_datetime,
    as_non_negative_decimal,
    as_positive_decimal,
    as_unix_timestamp,
)
from ._params import time_range_params

MAX_BOOK_DEPTH = 100


class MarketType(str, Enum):
    FUTURE = "future"
    SPOT = "spot"


@dataclass(slots=True, frozen=True)
class BookDepth:
    """Number of order book levels to return, 1 to 100."""

    levels: int

    def __post_init__(self) -> None:
        if isinstance(self.levels, bool) or not isinstance(self.levels, int):
            raise TypeError("levels must be int")
        if not 1 <= self.levels <= MAX_BOOK_DEPTH:
            raise ValueError(f"book depth must be between 1 and {MAX_BOOK_DEPTH}")


@dataclass(slots=True, frozen=True)
class Market(Record):
    market_type: MarketType = json_field("type", enum_of(MarketType))
    name: str = json_field("name", as_str)
    underlying: str | None = json_field("underlying", as_str, optional=True)
    base_currency: str | None = json_field("baseCurrency", as_str, optional=True)
    quote_currency: str | None = json_field("quoteCurrency", as_str, optional=True)
    enabled: bool = json_field("enabled", as_bool)
    ask: Price | None = json_field("ask", as_positive_decimal, optional=True)
    bid: Price | None = json_field("bid", as_positive_decimal, optional=True)
    last: Price | None = json_field("last", as_positive_decimal, optional=True)
    price: Price | None = json_field("price", as_positive_decimal, optional=True)
    post_only: bool = json_field("postOnly", as_bool)
    price_increment: Price = json_field("priceIncrement", as_positive_decimal)
    size_increment: Size = json_field("sizeIncrement", as_positive_decimal)
    min_provide_size: Size = json_field("minProvideSize", as_positive_decimal)
    tokenized_equity: bool | None = json_field("tokenizedEquity", as_bool, optional=True)
    restricted: bool = json_field("restricted", as_bool)
    high_leverage_fee_exempt: bool | None = json_field(
        "highLeverageFeeExempt", as_bool, optional=True
    )
    price_high_24h: Price | None = json_field("priceHigh24h", as_positive_decimal, optional=True)
    price_low_24h: Price | None = json_field("priceLow24h", as_positive_decimal, optional=True)
    change_1h: Decimal | None = json_field("change1h", as_decimal, optional=True)
    change_24h: Decimal | None = json_field("change24h", as_decimal, optional=True)
    change_bod: Decimal | None = json_field("changeBod", as_decimal, optional=True)
    quote_volume_24h: NonNegativeDecimal | None = json_field(
        "quoteVolume24h", as_non_negative_decimal, optional=True
    )
    volume_usd_24h: NonNegativeDecimal | None = json_field(
        "volumeUsd24h", as_non_negative_decimal, optional=True
    )
    large_order_threshold: Size = json_field("largeOrderThreshold", as_positive_decimal)
    is_etf_market: bool = json_field("isEtfMarket", as_bool)


_as_levels = list_of(pair_of(as_positive_decimal, as_positive_decimal))


@dataclass(slots=True, frozen=True)
class OrderBook(Record):
    """Order book snapshot; each level is a ``(price, size)`` pair."""

    asks: tuple[tuple[Price, Size], ...] = json_field("asks", _as_levels)
    bids: tuple[tuple[Price, Size], ...] = json_field("bids", _as_levels)


@dataclass(slots=True, frozen=True)
class Trade(Record):
    id: int = json_field("id", as_int)
    liquidation: bool = json_field("liquidation", as_bool)
    price: Price = json_field("price", as_positive_decimal)
    side: Side = json_field("side", enum_of(Side))
    size: Size = json_field("size", as_positive_decimal)
    time: datetime = json_field("time", as_datetime)


@dataclass(slots=True, frozen=True)
class Candle(Record):
    close: Price = json_field("close", as_positive_decimal)
    high: Price = json_field("high", as_positive_decimal)
    low: Price = json_field("low", as_positive_decimal)
    open: Price = json_field("open", as_positive_decimal)
    volume: NonNegativeDecimal = json_field("volume", as_non_negative_decimal)
    start_time: datetime = json_field("startTime", as_datetime)
    time: UnixTimestamp = json_field("time", as_unix_timestamp)


class GetMarketsResponse(Response[tuple[Market, ...], PartialRecordList[Market]]):
    __slots__ = ()
    PAYLOAD = RecordListPayload(Market)


class GetMarketResponse(Response[Market, PartialRecord[Market]]):
    __slots__ = ()
    PAYLOAD = RecordPayload(Market)


class GetOrderBookResponse(Response[OrderBook, PartialRecord[OrderBook]]):
    __slots__ = ()
    PAYLOAD = RecordPayload(OrderBook)


class GetTradesResponse(Response[tuple[Trade, ...], PartialRecordList[Trade]]):
    __slots__ = ()
    PAYLOAD = RecordListPayload(Trade)


class GetCandlesResponse(Response[tuple[Candle, ...], PartialRecordList[Candle]]):
    __slots__ = ()
    PAYLOAD = RecordListPayload(Candle)


@dataclass(slots=True, frozen=True)
class GetMarkets(PublicRequest[GetMarketsResponse]):
    """All markets."""

    PATH = "/markets"
    RESPONSE = GetMarketsResponse


@dataclass(slots=True, frozen=True)
class GetMarket(PublicRequest[GetMarketResponse]):
    PATH = "/markets/{market}"
    RESPONSE = GetMarketResponse

    market: str

    def path(self) -> str:
        return self.PATH.format(market=self.market)


@dataclass(slots=True, frozen=True)
class GetOrderBook(PublicRequest[GetOrderBookResponse]):
    PATH = "/markets/{market}/orderbook"
    RESPONSE = GetOrderBookResponse

    market: str
    depth: BookDepth | None = None

    def path(self) -> str:
        return self.PATH.format(market=self.market)

    def query_params(self) -> QueryParams | None:
        if self.depth is None:
            return None
        return [("depth", str(self.depth.levels))]


@dataclass(slots=True, frozen=True)
class GetTrades(PublicRequest[GetTradesResponse]):
    PATH = "/markets/{market}/trades"
    RESPONSE = GetTradesResponse

    market: str
    start_time: UnixTimestamp | None = None
    end_time: UnixTimestamp | None = None

    def path(self) -> str:
        return self.PATH.format(market=self.market)

    def query_params(self) -> QueryParams | None:
        return time_range_params(self.start_time, self.end_time) or None


@dataclass(slots=True, frozen=True)
class GetCandles(PublicRequest[GetCandlesResponse]):
    """Historical candles; ``resolution`` is a ``WindowLength`` or ``WindowLength.days(n)``."""

    PATH = "/markets/{market}/candles"
    RESPONSE = GetCandlesResponse

    market: str
    resolution: int
    start_time: UnixTimestamp | None = None
    end_time: UnixTimestamp | None = None

    def path(self) -> str:
        return self.PATH.format(market=self.market)

    def query_params(self) -> QueryParams | None:
        params = [("resolution", str(int(self.resolution)))]
        params.extend(time_range_params(self.start_time, self.end_time))
        return params


__all__ = [
    "MAX_BOOK_DEPTH",
    "MarketType",
    "BookDepth",
    "Market",
    "OrderBook",
    "Trade",
    "Candle",
    "GetMarkets",
    "GetMarketsResponse",
    "GetMarket",
    "GetMarketResponse",
    "GetOrderBook",
    "GetOrderBookResponse",
    "GetTrades",
    "GetTradesResponse",
    "GetCandles",
    "GetCandlesResponse",
]
