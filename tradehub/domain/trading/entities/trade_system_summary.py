"""TradeSystemSummary - read model of a trade joined with one system link."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from ..value_objects import BuySell, ProductType, SystemCode, TradeSystemStatus


@dataclass(frozen=True)
class TradeSystemSummary:
    """One (trade, system) row for blotters and read services."""

    stp_trade_id: int
    trade_id: str
    product_type: ProductType
    currency_pair: str
    trade_date: date
    execution_time_utc: datetime
    buy_sell: BuySell
    notional: Decimal
    notional_currency: str
    trade_system_link_id: int
    system_code: SystemCode
    status: TradeSystemStatus
