"""Trade - canonical representation of a negotiated FX trade.

Aggregate root of a trade bundle. System links and workflow events reference
it through ``stp_trade_id``, which only exists after the trade is inserted.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal

from ..value_objects import BuySell, ProductType


@dataclass(kw_only=True)
class Trade:
    """Normalized FX trade (spot, forward, swap, NDF, vanilla or NDO option).

    Option-only fields (call_put, strike, expiry_date, cut, premium*) stay None
    for linear products; hedge fields (hedge_type, hedge_rate, spot_rate,
    swap_points) are only filled for hedge legs.

    Example:
        >>> trade = Trade(
        ...     trade_id="VB-123",
        ...     product_type=ProductType.OPTION_VANILLA,
        ...     source_type="FIX",
        ...     source_venue_code="VOLBROKER",
        ...     currency_pair="EURSEK",
        ...     trade_date=date(2025, 3, 3),
        ...     execution_time_utc=datetime(2025, 3, 3, 9, 30, tzinfo=timezone.utc),
        ...     buy_sell=BuySell.BUY,
        ...     notional=Decimal("10000000"),
        ...     notional_currency="EUR",
        ...     settlement_date=date(2025, 5, 7),
        ... )
    """

    trade_id: str
    product_type: ProductType
    source_type: str
    source_venue_code: str
    currency_pair: str
    trade_date: date
    execution_time_utc: datetime
    buy_sell: BuySell
    notional: Decimal
    notional_currency: str
    settlement_date: date

    stp_trade_id: int | None = None
    message_in_id: int | None = None

    # Parties (normalized through lookups)
    counterparty_code: str = ""
    broker_code: str | None = None
    trader_id: str = ""
    inv_id: str | None = None
    reporting_entity_id: str | None = None

    # Venue / regulatory identifiers
    mic: str | None = None
    isin: str | None = None
    uti: str | None = None
    tvtic: str | None = None

    # Settlement
    near_settlement_date: date | None = None
    is_non_deliverable: bool = False
    fixing_date: date | None = None
    settlement_currency: str | None = None

    # Linear / hedge fields
    margin: Decimal | None = None
    hedge_rate: Decimal | None = None
    spot_rate: Decimal | None = None
    swap_points: Decimal | None = None
    hedge_type: str | None = None

    # Option fields
    call_put: str | None = None
    strike: Decimal | None = None
    expiry_date: date | None = None
    cut: str | None = None
    premium: Decimal | None = None
    premium_currency: str | None = None
    premium_date: date | None = None

    portfolio_mx3: str | None = None
    is_deleted: bool = False
    last_updated_utc: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.stp_trade_id is not None

    def for_message(self, message_in_id: int) -> "Trade":
        """Copy of this trade linked back to its originating message."""
        return replace(self, message_in_id=message_in_id)
