"""Base domain exceptions.

Domain exceptions represent violations of business rules.
They belong to the domain layer and do not depend on infrastructure.
"""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain errors.

    Example:
        >>> raise DomainException("Link status cannot move backwards", link_id=7)
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize domain exception.

        Args:
            message: Human-readable error message.
            **context: Additional context (message_in_id, stp_trade_id, etc).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class BusinessRuleViolation(DomainException):
    """Exception raised when business rule is violated.

    Example:
        >>> if status is TradeSystemStatus.ERROR and not error_message:
        ...     raise BusinessRuleViolation(
        ...         "ERROR status requires an error message",
        ...         system_code="MX3",
        ...     )
    """

    pass


class AggregateNotFound(DomainException):
    """Exception raised when aggregate is not found."""

    pass


class InvalidStateTransition(DomainException):
    """Exception raised for invalid state transitions.

    Example:
        >>> # BOOKED -> PENDING moves backwards through the booking lifecycle
        >>> raise InvalidStateTransition(
        ...     "Cannot transition from BOOKED to PENDING",
        ...     from_status="BOOKED",
        ...     to_status="PENDING",
        ... )
    """

    pass
