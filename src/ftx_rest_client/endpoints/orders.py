"""Order endpoints (private)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from ..core.decoding import (
    Lazy,
    PartialRecord,
    PartialRecordList,
    Record,
    RecordListPayload,
    RecordPayload,
    ValuePayload,
    as_bool,
    as_decimal,
    as_int,
    as_str,
    enum_of,
    json_field,
)
from ..core.request import PrivateRequest, QueryParams, Response
from ..primitives import PositiveDecimal, Side, UnixTimestamp, as_datetime
from ._params import time_range_params


class OrderType(str, Enum):
    LIMIT = "limit"
    MARKET = "market"


class OrderStatus(str, Enum):
    NEW = "new"
    OPEN = "open"
    CLOSED = "closed"


@dataclass(slots=True, frozen=True)
class OrderId:
    """Exchange-issued order id or client-supplied id.

    Use :meth:`exchange` or :meth:`client` to build one.
    """

    exchange_id: int | None = None
    client_id: str | None = None

    def __post_init__(self) -> None:
        if (self.exchange_id is None) == (self.client_id is None):
            raise ValueError("exactly one of exchange_id and client_id must be set")
        if self.exchange_id is not None and (
            isinstance(self.exchange_id, bool) or not isinstance(self.exchange_id, int)
        ):
            raise TypeError("exchange_id must be int")
        if self.client_id is not None and not self.client_id:
            raise ValueError("client_id must not be empty")

    @classmethod
    def exchange(cls, order_id: int) -> "OrderId":
        return cls(exchange_id=order_id)

    @classmethod
    def client(cls, client_id: str) -> "OrderId":
        return cls(client_id=client_id)

    def path_segment(self) -> str:
        if self.exchange_id is not None:
            return str(self.exchange_id)
        return f"by_client_id/{self.client_id}"


@dataclass(slots=True, frozen=True)
class Order(Record):
    id: int = json_field("id", as_int)
    client_id: str | None = json_field("clientId", as_str, optional=True)
    market: str = json_field("market", as_str)
    future: str | None = json_field("future", as_str, optional=True)
    side: Side = json_field("side", enum_of(Side))
    size: Decimal = json_field("size", as_decimal)
    price: Decimal = json_field("price", as_decimal)
    avg_fill_price: Decimal | None = json_field("avgFillPrice", as_decimal, optional=True)
    filled_size: Decimal = json_field("filledSize", as_decimal)
    remaining_size: Decimal = json_field("remainingSize", as_decimal)
    order_type: OrderType = json_field("type", enum_of(OrderType))
    status: OrderStatus = json_field("status", enum_of(OrderStatus))
    reduce_only: bool = json_field("reduceOnly", as_bool)
    ioc: bool = json_field("ioc", as_bool)
    post_only: bool = json_field("postOnly", as_bool)
    liquidation: bool = json_field("liquidation", as_bool)
    created_at: datetime = json_field("createdAt", as_datetime)


@dataclass(slots=True, frozen=True)
class OrderPlaced(Record):
    """Order as acknowledged by place/modify; ``liquidation`` may be absent."""

    id: int = json_field("id", as_int)
    client_id: str | None = json_field("clientId", as_str, optional=True)
    market: str = json_field("market", as_str)
    future: str | None = json_field("future", as_str, optional=True)
    side: Side = json_field("side", enum_of(Side))
    size: Decimal = json_field("size", as_decimal)
    price: Decimal = json_field("price", as_decimal)
    avg_fill_price: Decimal | None = json_field("avgFillPrice", as_decimal, optional=True)
    filled_size: Decimal = json_field("filledSize", as_decimal)
    remaining_size: Decimal = json_field("remainingSize", as_decimal)
    order_type: OrderType = json_field("type", enum_of(OrderType))
    status: OrderStatus = json_field("status", enum_of(OrderStatus))
    reduce_only: bool = json_field("reduceOnly", as_bool)
    ioc: bool = json_field("ioc", as_bool)
    post_only: bool = json_field("postOnly", as_bool)
    liquidation: bool | None = json_field("liquidation", as_bool, optional=True)
    created_at: datetime = json_field("createdAt", as_datetime)


class GetOpenOrdersResponse(Response[tuple[Order, ...], PartialRecordList[Order]]):
    __slots__ = ()
    PAYLOAD = RecordListPayload(Order)


class GetOrderHistoryResponse(Response[tuple[Order, ...], PartialRecordList[Order]]):
    __slots__ = ()
    PAYLOAD = RecordListPayload(Order)


class GetOrderStatusResponse(Response[Order, PartialRecord[Order]]):
    __slots__ = ()
    PAYLOAD = RecordPayload(Order)


class PlaceOrderResponse(Response[OrderPlaced, PartialRecord[OrderPlaced]]):
    __slots__ = ()
    PAYLOAD = RecordPayload(OrderPlaced)


class EditOrderResponse(Response[OrderPlaced, PartialRecord[OrderPlaced]]):
    __slots__ = ()
    PAYLOAD = RecordPayload(OrderPlaced)


class CancelOrderResponse(Response[str, Lazy[str]]):
    """Acknowledgement message such as ``"Order queued for cancellation"``."""

    __slots__ = ()
    PAYLOAD = ValuePayload(as_str)


class CancelAllOrdersResponse(Response[str, Lazy[str]]):
    __slots__ = ()
    PAYLOAD = ValuePayload(as_str)


@dataclass(slots=True, frozen=True)
class GetOpenOrders(PrivateRequest[GetOpenOrdersResponse]):
    PATH = "/orders"
    RESPONSE = GetOpenOrdersResponse

    market: str | None = None

    def query_params(self) -> QueryParams | None:
        if self.market is None:
            return None
        return [("market", self.market)]


@dataclass(slots=True, frozen=True)
class GetOrderHistory(PrivateRequest[GetOrderHistoryResponse]):
    PATH = "/orders/history"
    RESPONSE = GetOrderHistoryResponse

    market: str | None = None
    side: Side | None = None
    order_type: OrderType | None = None
    start_time: UnixTimestamp | None = None
    end_time: UnixTimestamp | None = None

    def query_params(self) -> QueryParams | None:
        params: list[tuple[str, str]] = []
        if self.market is not None:
            params.append(("market", self.market))
        if self.side is not None:
            params.append(("side", self.side.value))
        if self.order_type is not None:
            params.append(("orderType", self.order_type.value))
        params.extend(time_range_params(self.start_time, self.end_time))
        return params or None


@dataclass(slots=True, frozen=True)
class GetOrderStatus(PrivateRequest[GetOrderStatusResponse]):
    PATH = "/orders/{order_id}"
    RESPONSE = GetOrderStatusResponse

    order_id: OrderId

    def path(self) -> str:
        return self.PATH.format(order_id=self.order_id.path_segment())


@dataclass(slots=True, frozen=True)
class PlaceOrder(PrivateRequest[PlaceOrderResponse]):
    """Place an order; leave ``price`` unset for a market order.

    Optional flags are only sent when set.
    """

    PATH = "/orders"
    METHOD = "POST"
    RESPONSE = PlaceOrderResponse

    market: str
    side: Side
    size: PositiveDecimal
    price: PositiveDecimal | None = None
    client_id: str | None = None
    ioc: bool | None = None
    post_only: bool | None = None
    reduce_only: bool | None = None
    reject_on_price_band: bool | None = None
    reject_after_ts: UnixTimestamp | None = None

    @property
    def order_type(self) -> OrderType:
        return OrderType.MARKET if self.price is None else OrderType.LIMIT

    def to_json(self) -> object | None:
        payload: dict[str, object] = {
            "market": self.market,
            "side": self.side,
            "price": None if self.price is None else self.price.value,
            "type": self.order_type,
            "size": self.size.value,
        }
        optional_fields = (
            ("clientId", self.client_id),
            ("ioc", self.ioc),
            ("postOnly", self.post_only),
            ("reduceOnly", self.reduce_only),
            ("rejectOnPriceBand", self.reject_on_price_band),
            ("rejectAfterTs", None if self.reject_after_ts is None else int(self.reject_after_ts)),
        )
        for key, value in optional_fields:
            if value is not None:
                payload[key] = value
        return payload


@dataclass(slots=True, frozen=True)
class EditOrder(PrivateRequest[EditOrderResponse]):
    """Modify an order; the exchange cancels it and places a replacement."""

    PATH = "/orders/{order_id}/modify"
    METHOD = "POST"
    RESPONSE = EditOrderResponse

    order_id: OrderId
    price: PositiveDecimal | None = None
    size: PositiveDecimal | None = None
    client_id: str | None = None

    def path(self) -> str:
        return self.PATH.format(order_id=self.order_id.path_segment())

    def to_json(self) -> object | None:
        payload: dict[str, object] = {}
        if self.price is not None:
            payload["price"] = self.price.value
        if self.size is not None:
            payload["size"] = self.size.value
        if self.client_id is not None:
            payload["clientId"] = self.client_id
        return payload


@dataclass(slots=True, frozen=True)
class CancelOrder(PrivateRequest[CancelOrderResponse]):
    PATH = "/orders/{order_id}"
    METHOD = "DELETE"
    RESPONSE = CancelOrderResponse

    order_id: OrderId

    def path(self) -> str:
        return self.PATH.format(order_id=self.order_id.path_segment())


@dataclass(slots=True, frozen=True)
class CancelAllOrders(PrivateRequest[CancelAllOrdersResponse]):
    """Cancel every open order, optionally narrowed by market or side."""

    PATH = "/orders"
    METHOD = "DELETE"
    RESPONSE = CancelAllOrdersResponse

    market: str | None = None
    side: Side | None = None
    limit_orders_only: bool | None = None

    def to_json(self) -> object | None:
        payload: dict[str, object] = {}
        if self.market is not None:
            payload["market"] = self.market
        if self.side is not None:
            payload["side"] = self.side
        if self.limit_orders_only is not None:
            payload["limitOrdersOnly"] = self.limit_orders_only
        return payload


__all__ = [
    "OrderType",
    "OrderStatus",
    "OrderId",
    "Order",
    "OrderPlaced",
    "GetOpenOrders",
    "GetOpenOrdersResponse",
    "GetOrderHistory",
    "GetOrderHistoryResponse",
    "GetOrderStatus",
    "GetOrderStatusResponse",
    "PlaceOrder",
    "PlaceOrderResponse",
    "EditOrder",
    "EditOrderResponse",
    "CancelOrder",
    "CancelOrderResponse",
    "CancelAllOrders",
    "CancelAllOrdersResponse",
]
