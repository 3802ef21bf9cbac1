"""SQLAlchemy ORM models for the STP database."""

from .base import Base
from .message_in_model import MessageInModel
from .reference_data_model import (
    BrokerMappingModel,
    ExpiryCutRuleModel,
    PortfolioMappingModel,
)
from .trade_model import TradeModel, TradeSystemLinkModel, TradeWorkflowEventModel

__all__ = [
    "Base",
    "MessageInModel",
    "TradeModel",
    "TradeSystemLinkModel",
    "TradeWorkflowEventModel",
    "ExpiryCutRuleModel",
    "BrokerMappingModel",
    "PortfolioMappingModel",
]
