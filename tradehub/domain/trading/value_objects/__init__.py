"""Value objects for the Trading bounded context."""

from .enums import BuySell, ProductType, SystemCode, TradeSystemStatus
from .reference_data import BrokerMapping, ExpiryCutRule

__all__ = [
    "ProductType",
    "BuySell",
    "SystemCode",
    "TradeSystemStatus",
    "ExpiryCutRule",
    "BrokerMapping",
]
