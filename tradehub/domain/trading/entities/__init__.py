"""Trading entities."""

from .trade import Trade
from .trade_system_link import TradeSystemLink
from .trade_system_summary import TradeSystemSummary
from .trade_workflow_event import TradeWorkflowEvent

__all__ = [
    "Trade",
    "TradeSystemLink",
    "TradeWorkflowEvent",
    "TradeSystemSummary",
]
