"""GetTradeSystemSummariesQuery - blotter view of trades per system."""

from dataclasses import dataclass

from tradehub.application.shared import Query
from tradehub.domain.trading.value_objects import SystemCode, TradeSystemStatus


@dataclass(frozen=True)
class GetTradeSystemSummariesQuery(Query):
    """Get (trade, system link) rows, optionally filtered.

    Args:
        system_code: Only rows for this system.
        status: Only rows in this link status.
    """

    system_code: SystemCode | None = None
    status: TradeSystemStatus | None = None
