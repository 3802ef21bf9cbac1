"""Message repository ports."""

from .message_repository import MessageInRepository

__all__ = ["MessageInRepository"]
