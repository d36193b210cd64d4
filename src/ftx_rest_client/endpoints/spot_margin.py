"""Spot margin endpoints (private)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..core.decoding import (
    PartialRecordList,
    Record,
    RecordListPayload,
    as_decimal,
    as_str,
    json_field,
)
from ..core.request import PrivateRequest, QueryParams, Response
from ..primitives import UnixTimestamp, as_datetime
from ._params import time_range_params


@dataclass(slots=True, frozen=True)
class BorrowRate(Record):
    coin: str = json_field("coin", as_str)
    estimate: Decimal = json_field("estimate", as_decimal)
    previous: Decimal = json_field("previous", as_decimal)


@dataclass(slots=True, frozen=True)
class BorrowAmount(Record):
    coin: str = json_field("coin", as_str)
    size: Decimal = json_field("size", as_decimal)


@dataclass(slots=True, frozen=True)
class BorrowMarket(Record):
    coin: str = json_field("coin", as_str)
    borrowed: Decimal = json_field("borrowed", as_decimal)
    free: Decimal = json_field("free", as_decimal)
    estimated_rate: Decimal = json_field("estimatedRate", as_decimal)
    previous_rate: Decimal = json_field("previousRate", as_decimal)


@dataclass(slots=True, frozen=True)
class BorrowPayment(Record):
    coin: str = json_field("coin", as_str)
    cost: Decimal = json_field("cost", as_decimal)
    fee_usd: Decimal = json_field("feeUsd", as_decimal)
    rate: Decimal = json_field("rate", as_decimal)
    size: Decimal = json_field("size", as_decimal)
    time: datetime = json_field("time", as_datetime)


class GetBorrowRatesResponse(Response[tuple[BorrowRate, ...], PartialRecordList[BorrowRate]]):
    __slots__ = ()
    PAYLOAD = RecordListPayload(BorrowRate)


class GetDailyBorrowedAmountsResponse(
    Response[tuple[BorrowAmount, ...], PartialRecordList[BorrowAmount]]
):
    __slots__ = ()
    PAYLOAD = RecordListPayload(BorrowAmount)


class GetBorrowForMarketResponse(
    Response[tuple[BorrowMarket, ...], PartialRecordList[BorrowMarket]]
):
    __slots__ = ()
    PAYLOAD = RecordListPayload(BorrowMarket)


class GetBorrowHistoryResponse(
    Response[tuple[BorrowPayment, ...], PartialRecordList[BorrowPayment]]
):
    __slots__ = ()
    PAYLOAD = RecordListPayload(BorrowPayment)


@dataclass(slots=True, frozen=True)
class GetBorrowRates(PrivateRequest[GetBorrowRatesResponse]):
    PATH = "/spot_margin/borrow_rates"
    RESPONSE = GetBorrowRatesResponse


@dataclass(slots=True, frozen=True)
class GetDailyBorrowedAmounts(PrivateRequest[GetDailyBorrowedAmountsResponse]):
    PATH = "/spot_margin/borrow_summary"
    RESPONSE = GetDailyBorrowedAmountsResponse


@dataclass(slots=True, frozen=True)
class GetBorrowForMarket(PrivateRequest[GetBorrowForMarketResponse]):
    """Borrow info for both coins of a spot market, e.g. ``BTC/USD``."""

    PATH = "/spot_margin/market_info"
    RESPONSE = GetBorrowForMarketResponse

    spot_market: str

    def query_params(self) -> QueryParams | None:
        return [("market", self.spot_market)]


@dataclass(slots=True, frozen=True)
class GetBorrowHistory(PrivateRequest[GetBorrowHistoryResponse]):
    PATH = "/spot_margin/borrow_history"
    RESPONSE = GetBorrowHistoryResponse

    start_time: UnixTimestamp | None = None
    end_time: UnixTimestamp | None = None

    def query_params(self) -> QueryParams | None:
        return time_range_params(self.start_time, self.end_time) or None


__all__ = [
    "BorrowRate",
    "BorrowAmount",
    "BorrowMarket",
    "BorrowPayment",
    "GetBorrowRates",
    "GetBorrowRatesResponse",
    "GetDailyBorrowedAmounts",
    "GetDailyBorrowedAmountsResponse",
    "GetBorrowForMarket",
    "GetBorrowForMarketResponse",
    "GetBorrowHistory",
    "GetBorrowHistoryResponse",
]
