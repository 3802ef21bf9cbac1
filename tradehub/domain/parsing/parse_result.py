"""ParseResult and TradeBundle - what a parser hands back to the orchestrator."""

from dataclasses import dataclass, field
from typing import Iterable

from tradehub.domain.shared import ValueObject, validate_value_object
from tradehub.domain.trading.entities import Trade, TradeSystemLink, TradeWorkflowEvent


@dataclass
class TradeBundle:
    """One trade plus its dependent records, produced from a single message.

    Links and events are unbound (stp_trade_id None) until the orchestrator
    has inserted the trade. A bundle without a trade is malformed and makes
    the whole message fail.
    """

    trade: Trade | None
    system_links: list[TradeSystemLink] = field(default_factory=list)
    workflow_events: list[TradeWorkflowEvent] = field(default_factory=list)


@dataclass(frozen=True)
class ParseResult(ValueObject):
    """Outcome of interpreting one inbound message.

    Invariants:
    - success=False ⇔ error is a non-empty string
    - trades is only populated when success=True

    A successful result with no trades is constructible; the orchestrator
    treats it as a failure.

    Example:
        >>> ParseResult.ok([TradeBundle(trade=option), TradeBundle(trade=hedge)])
        >>> ParseResult.failed("No legs found in AE message.")
    """

    success: bool
    error: str | None = None
    trades: tuple[TradeBundle, ...] = ()

    def __post_init__(self) -> None:
        if self.success:
            validate_value_object(self.error is None, "successful ParseResult cannot carry an error")
        else:
            validate_value_object(
                bool(self.error and self.error.strip()),
                "failed ParseResult requires an error message",
            )
            validate_value_object(not self.trades, "failed ParseResult cannot carry trades")

    @classmethod
    def ok(cls, trades: Iterable[TradeBundle]) -> "ParseResult":
        return cls(success=True, trades=tuple(trades))

    @classmethod
    def failed(cls, error: str) -> "ParseResult":
        return cls(success=False, error=error)
