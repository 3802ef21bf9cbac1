"""Base Command class for the CQRS split.

Command - a request to change system state (write operation).
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class Command(ABC):
    """Base class for all commands.

    Command characteristics:
    - **Immutable**: frozen=True prevents changes after creation
    - **Verb-based naming**: ProcessMessage, ProcessPendingMessages
    - **No business logic**: data only, logic lives in the Handler

    Example:
        >>> @dataclass(frozen=True)
        ... class ProcessMessageCommand(Command):
        ...     message_in_id: int

        >>> result = await handler.handle(ProcessMessageCommand(message_in_id=42))
    """

    pass
