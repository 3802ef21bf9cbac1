"""TradeWorkflowEvent - append-only audit entry for a trade."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from ..value_objects import SystemCode


@dataclass(frozen=True, kw_only=True)
class TradeWorkflowEvent:
    """Immutable record of a state or field change on a trade.

    Never mutated after insertion; binding to the owning trade produces a
    new instance.

    Example:
        >>> event = TradeWorkflowEvent(
        ...     event_type="WARNING",
        ...     description="No cut mapping for EURSEK",
        ...     field_name="Cut",
        ...     old_value="NYC",
        ...     new_value="",
        ...     initiator_id="VolbrokerFixAeParser",
        ... )
        >>> bound = event.for_trade(42)
    """

    event_type: str
    description: str = ""
    stp_trade_id: int | None = None
    system_code: SystemCode | None = None
    field_name: str | None = None
    old_value: str | None = None
    new_value: str | None = None
    event_time_utc: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    initiator_id: str | None = None

    @property
    def has_field_change(self) -> bool:
        return bool(self.field_name or self.old_value or self.new_value)

    def for_trade(self, stp_trade_id: int) -> "TradeWorkflowEvent":
        """Copy of this event owned by the persisted trade."""
        return replace(self, stp_trade_id=stp_trade_id)
