"""Parsing commands."""

from .process_message import ProcessMessageCommand
from .process_pending_messages import ProcessPendingMessagesCommand

__all__ = ["ProcessMessageCommand", "ProcessPendingMessagesCommand"]
