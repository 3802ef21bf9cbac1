"""ProcessMessageCommand - parse one staged inbound message."""

from dataclasses import dataclass

from tradehub.application.shared import Command


@dataclass(frozen=True)
class ProcessMessageCommand(Command):
    """Parse and persist a single message by id.

    Args:
        message_in_id: Id of the staged message.

    Usage:
        >>> result = await handler.handle(ProcessMessageCommand(message_in_id=42))
        >>> print(result.outcome, result.stp_trade_ids)
    """

    message_in_id: int
