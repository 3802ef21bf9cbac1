"""Domain ↔ ORM mappers."""

from .message_in_mapper import MessageInMapper
from .reference_data_mapper import ReferenceDataMapper
from .trade_mapper import TradeMapper

__all__ = ["MessageInMapper", "TradeMapper", "ReferenceDataMapper"]
