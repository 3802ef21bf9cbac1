"""Parsing queries."""

from .get_trade_system_summaries import GetTradeSystemSummariesQuery

__all__ = ["GetTradeSystemSummariesQuery"]
