"""ProcessPendingMessagesCommand - one batch run of the pipeline."""

from dataclasses import dataclass

from tradehub.application.shared import Command


@dataclass(frozen=True)
class ProcessPendingMessagesCommand(Command):
    """Process up to ``max_messages`` unparsed messages in store order.

    Args:
        max_messages: Batch size override (None = handler default).
    """

    max_messages: int | None = None

    def __post_init__(self) -> None:
        if self.max_messages is not None and self.max_messages < 1:
            raise ValueError(f"max_messages must be positive, got {self.max_messages}")
