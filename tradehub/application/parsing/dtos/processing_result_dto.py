"""Processing result DTOs returned by the orchestrator handlers."""

from dataclasses import dataclass, field
from enum import Enum


class ProcessingOutcome(str, Enum):
    """What happened to one message in one ProcessMessage call."""

    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_PARSED = "ALREADY_PARSED"


class ParseFailureKind(str, Enum):
    """Why a message was marked failed."""

    NO_PARSER_AVAILABLE = "NO_PARSER_AVAILABLE"
    PARSER_REJECTED = "PARSER_REJECTED"
    EMPTY_RESULT = "EMPTY_RESULT"
    MALFORMED_BUNDLE = "MALFORMED_BUNDLE"
    PERSISTENCE_FAULT = "PERSISTENCE_FAULT"
    UNHANDLED_PARSER_FAULT = "UNHANDLED_PARSER_FAULT"


@dataclass(frozen=True)
class MessageProcessingResultDTO:
    """Result of processing one inbound message.

    ``stp_trade_ids`` lists trades that were persisted, which on failure may
    be non-empty (bundles committed before the failing one).
    """

    message_in_id: int
    outcome: ProcessingOutcome
    parser_name: str | None = None
    failure_kind: ParseFailureKind | None = None
    error: str | None = None
    stp_trade_ids: tuple[int, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.outcome is ProcessingOutcome.SUCCEEDED


@dataclass(frozen=True)
class BatchProcessingResultDTO:
    """Result of one ProcessPendingMessages run."""

    fetched: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0
    errored: int = 0
    trades_persisted: int = 0
    results: list[MessageProcessingResultDTO] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return self.succeeded + self.failed
