"""TradeSystemSummary DTO for read services."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from tradehub.domain.trading.entities import TradeSystemSummary


@dataclass(frozen=True)
class TradeSystemSummaryDTO:
    """Flat (trade, system link) row with enum values as plain strings."""

    stp_trade_id: int
    trade_id: str
    product_type: str
    currency_pair: str
    trade_date: date
    execution_time_utc: datetime
    buy_sell: str
    notional: Decimal
    notional_currency: str
    trade_system_link_id: int
    system_code: str
    status: str

    @classmethod
    def from_entity(cls, summary: TradeSystemSummary) -> "TradeSystemSummaryDTO":
        return cls(
            stp_trade_id=summary.stp_trade_id,
            trade_id=summary.trade_id,
            product_type=summary.product_type.value,
            currency_pair=summary.currency_pair,
            trade_date=summary.trade_date,
            execution_time_utc=summary.execution_time_utc,
            buy_sell=summary.buy_sell.value,
            notional=summary.notional,
            notional_currency=summary.notional_currency,
            trade_system_link_id=summary.trade_system_link_id,
            system_code=summary.system_code.value,
            status=summary.status.value,
        )
