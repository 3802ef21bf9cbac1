"""SQLAlchemyStpLookupRepository - implements StpLookupRepository port.

Unlike the write repositories, it is not bound to a Unit of Work session:
parsers are built once per worker and hold it for their lifetime, so every
lookup opens its own short read-only session.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tradehub.domain.trading.repositories import StpLookupRepository
from tradehub.domain.trading.value_objects import (
    BrokerMapping,
    ExpiryCutRule,
    ProductType,
    SystemCode,
)
from tradehub.infrastructure.persistence.sqlalchemy.mappers import ReferenceDataMapper
from tradehub.infrastructure.persistence.sqlalchemy.models import (
    BrokerMappingModel,
    ExpiryCutRuleModel,
    PortfolioMappingModel,
)


class SQLAlchemyStpLookupRepository(StpLookupRepository):
    """Reads active rows of the expiry cut, broker and portfolio mapping tables.

    Example:
        >>> lookups = SQLAlchemyStpLookupRepository(session_factory)
        >>> rule = await lookups.get_expiry_cut_by_currency_pair("EURSEK")
        >>> rule.expiry_cut if rule else None
        'NY'
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._mapper = ReferenceDataMapper()

    async def get_expiry_cut_by_currency_pair(self, currency_pair: str) -> ExpiryCutRule | None:
        stmt = select(ExpiryCutRuleModel).where(
            ExpiryCutRuleModel.currency_pair == currency_pair.upper(),
            ExpiryCutRuleModel.is_active.is_(True),
        )
        async with self._session_factory() as session:
            model = (await session.execute(stmt)).scalars().first()

        return self._mapper.expiry_cut_to_value(model) if model else None

    async def get_broker_mapping(
        self, source_venue_code: str, external_broker_code: str
    ) -> BrokerMapping | None:
        stmt = select(BrokerMappingModel).where(
            BrokerMappingModel.source_venue_code == source_venue_code,
            BrokerMappingModel.external_broker_code == external_broker_code,
            BrokerMappingModel.is_active.is_(True),
        )
        async with self._session_factory() as session:
            model = (await session.execute(stmt)).scalars().first()

        return self._mapper.broker_mapping_to_value(model) if model else None

    async def get_portfolio_code(
        self,
        system_code: SystemCode,
        currency_pair: str,
        product_type: ProductType,
    ) -> str | None:
        stmt = select(PortfolioMappingModel.portfolio_code).where(
            PortfolioMappingModel.system_code == system_code.value,
            PortfolioMappingModel.currency_pair == currency_pair.upper(),
            PortfolioMappingModel.product_type == product_type.value,
            PortfolioMappingModel.is_active.is_(True),
        )
        async with self._session_factory() as session:
            return (await session.execute(stmt)).scalars().first()
