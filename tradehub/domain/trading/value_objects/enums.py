"""Enums for the Trading bounded context.

Enum values are the exact strings stored in the STP database.
"""

from enum import Enum


class ProductType(str, Enum):
    """Normalized FX product type."""

    SPOT = "SPOT"
    FWD = "FWD"
    SWAP = "SWAP"
    NDF = "NDF"
    OPTION_VANILLA = "OPTION_VANILLA"
    OPTION_NDO = "OPTION_NDO"

    @property
    def is_option(self) -> bool:
        return self in (ProductType.OPTION_VANILLA, ProductType.OPTION_NDO)


class BuySell(str, Enum):
    """Trade direction from our side."""

    BUY = "BUY"
    SELL = "SELL"


class SystemCode(str, Enum):
    """External booking / settlement systems a trade is projected into."""

    MX3 = "MX3"
    CALYPSO = "CALYPSO"
    VOLBROKER_STP = "VOLBROKER_STP"
    RTNS = "RTNS"


class TradeSystemStatus(str, Enum):
    """Status of a trade in one external system.

    Booking lifecycle (forward only):
        NEW → PENDING → BOOKED → READY_TO_ACK → ACK_SENT
         ↘        ↘ ERROR              ↘ ACK_ERROR → ACK_SENT
          CANCELLED (from NEW, PENDING, BOOKED, ERROR)
    """

    NEW = "NEW"
    PENDING = "PENDING"
    BOOKED = "BOOKED"
    ERROR = "ERROR"
    CANCELLED = "CANCELLED"
    READY_TO_ACK = "READY_TO_ACK"
    ACK_SENT = "ACK_SENT"
    ACK_ERROR = "ACK_ERROR"

    @property
    def requires_error_text(self) -> bool:
        """ERROR and ACK_ERROR must carry a non-empty error message."""
        return self in (TradeSystemStatus.ERROR, TradeSystemStatus.ACK_ERROR)

    def is_final(self) -> bool:
        """No further transition is possible."""
        return not _ALLOWED_TRANSITIONS[self]

    def can_transition_to(self, target: "TradeSystemStatus") -> bool:
        """Check that target is a forward step from this status."""
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[TradeSystemStatus, frozenset[TradeSystemStatus]] = {
    TradeSystemStatus.NEW: frozenset({
        TradeSystemStatus.PENDING,
        TradeSystemStatus.BOOKED,
        TradeSystemStatus.ERROR,
        TradeSystemStatus.CANCELLED,
    }),
    TradeSystemStatus.PENDING: frozenset({
        TradeSystemStatus.BOOKED,
        TradeSystemStatus.ERROR,
        TradeSystemStatus.CANCELLED,
    }),
    TradeSystemStatus.BOOKED: frozenset({
        TradeSystemStatus.READY_TO_ACK,
        TradeSystemStatus.CANCELLED,
    }),
    TradeSystemStatus.ERROR: frozenset({TradeSystemStatus.CANCELLED}),
    TradeSystemStatus.READY_TO_ACK: frozenset({
        TradeSystemStatus.ACK_SENT,
        TradeSystemStatus.ACK_ERROR,
    }),
    TradeSystemStatus.ACK_ERROR: frozenset({TradeSystemStatus.ACK_SENT}),
    TradeSystemStatus.ACK_SENT: frozenset(),
    TradeSystemStatus.CANCELLED: frozenset(),
}
