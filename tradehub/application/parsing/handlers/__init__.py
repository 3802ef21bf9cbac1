"""Parsing handlers."""

from .get_trade_system_summaries_handler import GetTradeSystemSummariesHandler
from .process_message_handler import ProcessMessageHandler
from .process_pending_messages_handler import ProcessPendingMessagesHandler

__all__ = [
    "ProcessMessageHandler",
    "ProcessPendingMessagesHandler",
    "GetTradeSystemSummariesHandler",
]
