"""Message entities."""

from .inbound_message import InboundMessage

__all__ = ["InboundMessage"]
