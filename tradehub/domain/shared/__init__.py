"""Shared Kernel - base classes for the whole domain layer.

- Entity: Object with identity
- ValueObject: Immutable object compared by value
- DomainException: Violation of business rules
"""

from .entity import Entity
from .exceptions import (
    AggregateNotFound,
    BusinessRuleViolation,
    DomainException,
    InvalidStateTransition,
)
from .value_object import ValueObject, validate_value_object

__all__ = [
    "Entity",
    "ValueObject",
    "validate_value_object",
    "DomainException",
    "BusinessRuleViolation",
    "AggregateNotFound",
    "InvalidStateTransition",
]
