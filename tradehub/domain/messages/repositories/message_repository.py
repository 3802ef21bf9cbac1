"""MessageInRepository Port - the message store gateway.

This is a PORT in Hexagonal Architecture (domain defines the interface).
Infrastructure layer implements it.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities import InboundMessage


class MessageInRepository(ABC):
    """Abstract interface for staged inbound messages and their parse state.

    Example (Domain uses):
        >>> pending = await message_repo.get_unparsed_messages(100)
        >>> message = await message_repo.get_by_id(pending[0].id)
        >>> message.mark_parsed()
        >>> await message_repo.update_parsing_state(message)
    """

    @abstractmethod
    async def insert_message_in(self, message: InboundMessage) -> int:
        """Stage a new inbound message.

        Args:
            message: Message to store (id must be None).

        Returns:
            Generated message id (also set on the entity).
        """
        pass

    @abstractmethod
    async def get_by_id(self, message_in_id: int) -> Optional[InboundMessage]:
        """Get message by ID.

        Args:
            message_in_id: Message id.

        Returns:
            InboundMessage or None if not found.
        """
        pass

    @abstractmethod
    async def get_unparsed_messages(self, max_count: int) -> list[InboundMessage]:
        """Get messages with parsed_flag = false.

        Args:
            max_count: Upper bound on returned rows.

        Returns:
            Unparsed messages in insertion order (oldest first).
        """
        pass

    @abstractmethod
    async def update_parsing_state(self, message: InboundMessage) -> None:
        """Persist parsed_flag, parsed_utc and parse_error of exactly this message.

        Args:
            message: Message whose parse state changed.

        Raises:
            AggregateNotFound: If the message row does not exist.
        """
        pass
