"""Account and position endpoints (private)."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ..core.decoding import (
    EmptyPayload,
    FieldDecodeError,
    Lazy,
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
    record_of,
)
from ..core.request import PrivateRequest, QueryParams, Response
from ..primitives import (
    NonNegativeDecimal,
    PositiveDecimal,
    Price,
    Side,
    Size,
    as_non_negative_decimal,
    as_positive_decimal,
)
from ._params import bool_param


class AccountLeverage(int, Enum):
    """Account-wide leverage values accepted by the exchange."""

    ONE = 1
    TWO = 2
    THREE = 3
    FIVE = 5
    TEN = 10
    TWENTY = 20


def as_account_leverage(value: object) -> AccountLeverage:
    # Sent as a JSON float, e.g. 10.0.
    number = as_decimal(value)
    if number != number.to_integral_value():
        raise FieldDecodeError(f"invalid account leverage {number}")
    try:
        return AccountLeverage(int(number))
    except ValueError as exc:
        raise FieldDecodeError(f"invalid account leverage {number}") from exc


@dataclass(slots=True, frozen=True)
class Position(Record):
    cost: Decimal = json_field("cost", as_decimal)
    entry_price: Price | None = json_field("entryPrice", as_positive_decimal, optional=True)
    estimated_liquidation_price: Price | None = json_field(
        "estimatedLiquidationPrice", as_positive_decimal, optional=True
    )
    future: str = json_field("future", as_str)
    initial_margin_requirement: PositiveDecimal = json_field(
        "initialMarginRequirement", as_positive_decimal
    )
    maintenance_margin_requirement: PositiveDecimal = json_field(
        "maintenanceMarginRequirement", as_positive_decimal
    )
    long_order_size: Size = json_field("longOrderSize", as_positive_decimal)
    short_order_size: Size = json_field("shortOrderSize", as_positive_decimal)
    net_size: Decimal = json_field("netSize", as_decimal)
    open_size: NonNegativeDecimal = json_field("openSize", as_non_negative_decimal)
    realized_pnl: Decimal = json_field("realizedPnl", as_decimal)
    side: Side = json_field("side", enum_of(Side))
    size: Size = json_field("size", as_positive_decimal)
    unrealized_pnl: Decimal = json_field("unrealizedPnl", as_decimal)
    collateral_used: NonNegativeDecimal = json_field("collateralUsed", as_non_negative_decimal)
    recent_average_open_price: Price | None = json_field(
        "recentAverageOpenPrice", as_positive_decimal, optional=True
    )
    recent_break_even_price: Price | None = json_field(
        "recentBreakEvenPrice", as_positive_decimal, optional=True
    )
    recent_pnl: Decimal | None = json_field("recentPnl", as_decimal, optional=True)
    cumulative_buy_size: NonNegativeDecimal | None = json_field(
        "cumulativeBuySize", as_non_negative_decimal, optional=True
    )
    cumulative_sell_size: NonNegativeDecimal | None = json_field(
        "cumulativeSellSize", as_non_negative_decimal, optional=True
    )


@dataclass(slots=True, frozen=True)
class AccountInformation(Record):
    """Account summary; ``positions`` is decoded as one field."""

    account_identifier: int = json_field("accountIdentifier", as_int)
    account_type: str | None = json_field("accountType", as_str, optional=True)
    backstop_provider: bool = json_field("backstopProvider", as_bool)
    collateral: NonNegativeDecimal = json_field("collateral", as_non_negative_decimal)
    free_collateral: NonNegativeDecimal = json_field("freeCollateral", as_non_negative_decimal)
    initial_margin_requirement: NonNegativeDecimal = json_field(
        "initialMarginRequirement", as_non_negative_decimal
    )
    maintenance_margin_requirement: NonNegativeDecimal = json_field(
        "maintenanceMarginRequirement", as_non_negative_decimal
    )
    leverage: AccountLeverage = json_field("leverage", as_account_leverage)
    futures_leverage: AccountLeverage = json_field("futuresLeverage", as_account_leverage)
    liquidating: bool = json_field("liquidating", as_bool)
    margin_fraction: NonNegativeDecimal | None = json_field(
        "marginFraction", as_non_negative_decimal, optional=True
    )
    open_margin_fraction: NonNegativeDecimal | None = json_field(
        "openMarginFraction", as_non_negative_decimal, optional=True
    )
    maker_fee: PositiveDecimal = json_field("makerFee", as_positive_decimal)
    taker_fee: PositiveDecimal = json_field("takerFee", as_positive_decimal)
    total_account_value: NonNegativeDecimal = json_field(
        "totalAccountValue", as_non_negative_decimal
    )
    total_position_size: NonNegativeDecimal = json_field(
        "totalPositionSize", as_non_negative_decimal
    )
    charge_interest_on_negative_usd: bool = json_field("chargeInterestOnNegativeUsd", as_bool)
    position_limit: PositiveDecimal | None = json_field(
        "positionLimit", as_positive_decimal, optional=True
    )
    position_limit_used: NonNegativeDecimal | None = json_field(
        "positionLimitUsed", as_non_negative_decimal, optional=True
    )
    use_ftt_collateral: bool = json_field("useFttCollateral", as_bool)
    username: str = json_field("username", as_str)
    spot_lending_enabled: bool = json_field("spotLendingEnabled", as_bool)
    spot_margin_enabled: bool = json_field("spotMarginEnabled", as_bool)
    spot_margin_withdrawals_enabled: bool = json_field("spotMarginWithdrawalsEnabled", as_bool)
    positions: tuple[Position, ...] = json_field("positions", list_of(record_of(Position)))


class GetAccountInformationResponse(
    Response[AccountInformation, PartialRecord[AccountInformation]]
):
    __slots__ = ()
    PAYLOAD = RecordPayload(AccountInformation)


class GetPositionsResponse(Response[tuple[Position, ...], PartialRecordList[Position]]):
    __slots__ = ()
    PAYLOAD = RecordListPayload(Position)


class ChangeAccountLeverageResponse(Response[None, Lazy[None]]):
    __slots__ = ()
    PAYLOAD = EmptyPayload()


@dataclass(slots=True, frozen=True)
class GetAccountInformation(PrivateRequest[GetAccountInformationResponse]):
    PATH = "/account"
    RESPONSE = GetAccountInformationResponse


@dataclass(slots=True, frozen=True)
class GetPositions(PrivateRequest[GetPositionsResponse]):
    PATH = "/positions"
    RESPONSE = GetPositionsResponse

    show_avg_price: bool | None = None

    def query_params(self) -> QueryParams | None:
        if self.show_avg_price is None:
            return None
        return [("showAvgPrice", bool_param(self.show_avg_price))]


@dataclass(slots=True, frozen=True)
class ChangeAccountLeverage(PrivateRequest[ChangeAccountLeverageResponse]):
    PATH = "/account/leverage"
    METHOD = "POST"
    RESPONSE = ChangeAccountLeverageResponse

    leverage: AccountLeverage

    def __post_init__(self) -> None:
        # Accept plain ints; reject anything outside the enum.
        object.__setattr__(self, "leverage", AccountLeverage(self.leverage))

    def to_json(self) -> object | None:
        return {"leverage": int(self.leverage)}


__all__ = [
    "AccountLeverage",
    "as_account_leverage",
    "Position",
    "AccountInformation",
    "GetAccountInformation",
    "GetAccountInformationResponse",
    "GetPositions",
    "GetPositionsResponse",
    "ChangeAccountLeverage",
    "ChangeAccountLeverageResponse",
]
