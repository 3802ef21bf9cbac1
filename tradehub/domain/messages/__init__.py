"""Messages bounded context - staged inbound messages."""

from .entities import InboundMessage
from .repositories import MessageInRepository

__all__ = ["InboundMessage", "MessageInRepository"]
