"""Unit of Work pattern - manages transactions.

UnitOfWork provides:
- Atomic operations (all or nothing inside one commit)
- Transaction boundary for a use case
- Access to both store gateways over one session
"""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type

from tradehub.domain.messages.repositories import MessageInRepository
from tradehub.domain.trading.repositories import StpRepository


class UnitOfWork(ABC):
    """Abstract Unit of Work interface.

    Example (use case):
        >>> async with uow:
        ...     trade_id = await uow.stp.insert_trade(trade)
        ...     await uow.stp.insert_trade_system_link(link.for_trade(trade_id))
        ...     await uow.commit()  # trade + link land together
        ...
        ...     message.mark_parsed()
        ...     await uow.messages.update_parsing_state(message)
        ...     await uow.commit()

    Leaving the block without commit rolls back whatever is still pending.
    """

    @property
    @abstractmethod
    def messages(self) -> MessageInRepository:
        """Message Store Gateway bound to this unit's session."""
        pass

    @property
    @abstractmethod
    def stp(self) -> StpRepository:
        """Trade Store Gateway bound to this unit's session."""
        pass

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        """Enter async context manager.

        Returns:
            Self (UnitOfWork instance).
        """
        pass

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Exit async context manager.

        Note:
            If exc_type is not None, must call rollback().
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Commit transaction.

        Raises:
            Exception: If commit failed.
        """
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback transaction."""
        pass
