"""Parsing contracts - parser port, parse results and dispatch registry."""

from .parse_result import ParseResult, TradeBundle
from .parser import InboundMessageParser
from .registry import ParserContractError, ParserRegistry

__all__ = [
    "InboundMessageParser",
    "ParseResult",
    "TradeBundle",
    "ParserRegistry",
    "ParserContractError",
]
