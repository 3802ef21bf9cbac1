"""StpLookupRepository Port - reference data consulted by parsers."""

from abc import ABC, abstractmethod
from typing import Optional

from ..value_objects import BrokerMapping, ExpiryCutRule, ProductType, SystemCode


class StpLookupRepository(ABC):
    """Read-only access to counterparty/venue/portfolio mapping tables.

    Parsers may call it while normalizing a message; it never writes.
    """

    @abstractmethod
    async def get_expiry_cut_by_currency_pair(
        self, currency_pair: str
    ) -> Optional[ExpiryCutRule]:
        """Get the expiry cut rule for a currency pair (e.g. EURSEK)."""
        pass

    @abstractmethod
    async def get_broker_mapping(
        self, source_venue_code: str, external_broker_code: str
    ) -> Optional[BrokerMapping]:
        """Get the normalized broker code for a venue's broker code."""
        pass

    @abstractmethod
    async def get_portfolio_code(
        self,
        system_code: SystemCode,
        currency_pair: str,
        product_type: ProductType,
    ) -> Optional[str]:
        """Get the booking portfolio for a system, pair and product type."""
        pass
