"""Parsing DTOs."""

from .processing_result_dto import (
    BatchProcessingResultDTO,
    MessageProcessingResultDTO,
    ParseFailureKind,
    ProcessingOutcome,
)
from .trade_system_summary_dto import TradeSystemSummaryDTO

__all__ = [
    "ProcessingOutcome",
    "ParseFailureKind",
    "MessageProcessingResultDTO",
    "BatchProcessingResultDTO",
    "TradeSystemSummaryDTO",
]
