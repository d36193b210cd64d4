"""Endpoint catalogue: request types and their decoded records."""

from .account import (
    AccountInformation,
    AccountLeverage,
    ChangeAccountLeverage,
    GetAccountInformation,
    GetPositions,
    Position,
)
from .markets import (
    BookDepth,
    Candle,
    GetCandles,
    GetMarket,
    GetMarkets,
    GetOrderBook,
    GetTrades,
    Market,
    MarketType,
    OrderBook,
    Trade,
)
from .orders import (
    CancelAllOrders,
    CancelOrder,
    EditOrder,
    GetOpenOrders,
    GetOrderHistory,
    GetOrderStatus,
    Order,
    OrderId,
    OrderPlaced,
    OrderStatus,
    OrderType,
    PlaceOrder,
)
from .spot_margin import (
    BorrowAmount,
    BorrowMarket,
    BorrowPayment,
    BorrowRate,
    GetBorrowForMarket,
    GetBorrowHistory,
    GetBorrowRates,
    GetDailyBorrowedAmounts,
)

__all__ = [
    "GetMarkets",
    "GetMarket",
    "GetOrderBook",
    "GetTrades",
    "GetCandles",
    "BookDepth",
    "MarketType",
    "Market",
    "OrderBook",
    "Trade",
    "Candle",
    "GetOpenOrders",
    "GetOrderHistory",
    "GetOrderStatus",
    "PlaceOrder",
    "EditOrder",
    "CancelOrder",
    "CancelAllOrders",
    "OrderId",
    "OrderType",
    "OrderStatus",
    "Order",
    "OrderPlaced",
    "GetBorrowRates",
    "GetDailyBorrowedAmounts",
    "GetBorrowForMarket",
    "GetBorrowHistory",
    "BorrowRate",
    "BorrowAmount",
    "BorrowMarket",
    "BorrowPayment",
    "GetAccountInformation",
    "GetPositions",
    "ChangeAccountLeverage",
    "AccountLeverage",
    "AccountInformation",
    "Position",
]
