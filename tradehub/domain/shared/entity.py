"""Base Entity class for domain model.

Entity - object with a unique identity. Two entities with equal attributes
but different ids are different objects.
"""

from abc import ABC


class Entity(ABC):
    """Base class for all domain entities.

    Entity has a unique identifier (id) and is compared by ID, not by attribute values.

    Example:
        >>> msg1 = MessageIn(id=1, source_type="FIX", ...)
        >>> msg2 = MessageIn(id=1, source_type="MAIL", ...)
        >>> msg1 == msg2  # True (same ID)
    """

    def __init__(self, id: int | None = None) -> None:
        """Initialize entity with optional ID.

        Args:
            id: Unique identifier. None for entities not yet stored.
        """
        self._id = id

    @property
    def id(self) -> int | None:
        """Get entity ID."""
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return False

        # Two unsaved entities are only equal to themselves
        if self._id is None and other._id is None:
            return self is other

        return type(self) is type(other) and self._id == other._id

    def __hash__(self) -> int:
        if self._id is None:
            return hash(id(self))
        return hash(self._id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"
