"""Base ValueObject class for domain model.

ValueObject - immutable object compared by attribute values rather than identity.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True, eq=True)
class ValueObject(ABC):
    """Base class for all domain value objects.

    ValueObject characteristics:
    - **Immutable**: Cannot be changed after creation (frozen=True)
    - **Equality by value**: Compared by attribute values, not by ID
    - **No identity**: Has no ID of its own

    Example:
        >>> @dataclass(frozen=True)
        ... class ExpiryCut(ValueObject):
        ...     currency_pair: str
        ...     cut: str
        ...
        ...     def __post_init__(self):
        ...         validate_value_object(len(self.currency_pair) == 6, "bad pair")
    """

    def __post_init__(self) -> None:
        """Hook for validation after initialization.

        Raises:
            ValueError: If validation fails.
        """
        pass


def validate_value_object(condition: bool, message: str) -> None:
    """Helper for validation in value objects.

    Args:
        condition: Condition that must be True.
        message: Error message if condition is False.

    Raises:
        ValueError: If condition is False.
    """
    if not condition:
        raise ValueError(message)
