"""Base Handler classes for Commands and Queries.

Handler - orchestrates domain logic to execute one use case.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .command import Command
from .query import Query

TCommand = TypeVar("TCommand", bound=Command)
TQuery = TypeVar("TQuery", bound=Query)
TResult = TypeVar("TResult")


class CommandHandler(ABC, Generic[TCommand, TResult]):
    """Base class for command handlers.

    A command handler is responsible for:
    - Loading aggregates through the Unit of Work repositories
    - Executing domain logic (entity methods)
    - Committing changes through the Unit of Work

    Example:
        >>> class ProcessMessageHandler(CommandHandler[ProcessMessageCommand, MessageProcessingResultDTO]):
        ...     def __init__(self, uow: UnitOfWork, registry: ParserRegistry):
        ...         self.uow = uow
        ...         self.registry = registry
        ...
        ...     async def handle(self, command):
        ...         async with self.uow:
        ...             message = await self.uow.messages.get_by_id(command.message_in_id)
        ...             ...
        ...             await self.uow.commit()
    """

    @abstractmethod
    async def handle(self, command: TCommand) -> TResult:
        """Handle command and return result.

        Args:
            command: Command to handle.

        Returns:
            Result of command execution.
        """
        pass


class QueryHandler(ABC, Generic[TQuery, TResult]):
    """Base class for query handlers.

    Query handlers fetch data from a repository and transform it to DTOs.
    They MUST NOT have side effects.
    """

    @abstractmethod
    async def handle(self, query: TQuery) -> TResult:
        """Handle query and return result.

        Args:
            query: Query to handle.

        Returns:
            Query result (DTOs or primitives).
        """
        pass
