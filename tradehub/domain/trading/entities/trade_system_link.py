"""TradeSystemLink - a trade's projection into one external system."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from tradehub.domain.shared import BusinessRuleViolation, InvalidStateTransition

from ..value_objects import SystemCode, TradeSystemStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(kw_only=True)
class TradeSystemLink:
    """Status and identifier of a trade in MX3, Calypso, Volbroker STP or RTNS.

    Parsers build links unbound (stp_trade_id is None). The orchestrator binds
    them with ``for_trade`` once the owning trade has an identity.

    Business Rules:
    - Status only moves forward through the booking lifecycle
    - ERROR / ACK_ERROR carry a non-empty error message

    Example:
        >>> link = TradeSystemLink(system_code=SystemCode.MX3, portfolio_code="FXOPT")
        >>> bound = link.for_trade(42)
        >>> bound.transition_to(TradeSystemStatus.PENDING)
        >>> bound.transition_to(TradeSystemStatus.BOOKED, external_trade_id="MX-991")
    """

    system_code: SystemCode
    status: TradeSystemStatus = TradeSystemStatus.NEW
    stp_trade_id: int | None = None
    trade_system_link_id: int | None = None
    external_trade_id: str = ""
    error_code: str = ""
    error_message: str = ""
    created_utc: datetime = field(default_factory=_utcnow)
    last_updated_utc: datetime = field(default_factory=_utcnow)
    is_deleted: bool = False

    # Booking routing
    portfolio_code: str | None = None
    book_flag: bool | None = None
    stp_mode: str | None = None
    imported_by: str | None = None
    booked_by: str | None = None
    first_booked_utc: datetime | None = None
    last_booked_utc: datetime | None = None
    stp_flag: bool | None = None

    def __post_init__(self) -> None:
        if self.status.requires_error_text and not self.error_message.strip():
            raise BusinessRuleViolation(
                f"{self.status.value} status requires an error message",
                system_code=self.system_code.value,
            )

    @property
    def is_bound(self) -> bool:
        return self.stp_trade_id is not None

    @property
    def last_error(self) -> str | None:
        """Error code and message combined for display, None when clean."""
        if self.error_code and self.error_message:
            return f"{self.error_code}: {self.error_message}"
        return self.error_message or self.error_code or None

    def for_trade(self, stp_trade_id: int) -> "TradeSystemLink":
        """Copy of this link owned by the persisted trade."""
        return replace(self, stp_trade_id=stp_trade_id)

    def transition_to(
        self,
        status: TradeSystemStatus,
        *,
        error_code: str = "",
        error_message: str = "",
        external_trade_id: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Move the link forward in the booking lifecycle.

        Raises:
            InvalidStateTransition: If status is not a forward step.
            BusinessRuleViolation: If an error status has no error message.
        """
        if not self.status.can_transition_to(status):
            raise InvalidStateTransition(
                f"Cannot transition from {self.status.value} to {status.value}",
                system_code=self.system_code.value,
                stp_trade_id=self.stp_trade_id,
            )

        if status.requires_error_text and not error_message.strip():
            raise BusinessRuleViolation(
                f"{status.value} status requires an error message",
                system_code=self.system_code.value,
            )

        now = now or _utcnow()
        self.status = status
        self.error_code = error_code
        self.error_message = error_message
        self.last_updated_utc = now

        if external_trade_id is not None:
            self.external_trade_id = external_trade_id

        if status is TradeSystemStatus.BOOKED:
            self.first_booked_utc = self.first_booked_utc or now
            self.last_booked_utc = now
