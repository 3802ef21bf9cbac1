"""SQLAlchemyStpRepository - implements StpRepository port."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradehub.domain.trading.entities import (
    Trade,
    TradeSystemLink,
    TradeSystemSummary,
    TradeWorkflowEvent,
)
from tradehub.domain.trading.repositories import StpRepository
from tradehub.infrastructure.persistence.sqlalchemy.mappers import TradeMapper
from tradehub.infrastructure.persistence.sqlalchemy.models import (
    TradeModel,
    TradeSystemLinkModel,
)

logger = logging.getLogger(__name__)


class SQLAlchemyStpRepository(StpRepository):
    """SQLAlchemy implementation of StpRepository.

    Inserts flush immediately so generated ids are available to the caller;
    committing is the Unit of Work's job.

    Example:
        >>> async with session_factory() as session:
        ...     repo = SQLAlchemyStpRepository(session)
        ...     stp_trade_id = await repo.insert_trade(trade)
        ...     await repo.insert_trade_system_link(link.for_trade(stp_trade_id))
        ...     await session.commit()
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session
        self._mapper = TradeMapper()

    async def insert_trade(self, trade: Trade) -> int:
        if trade.is_persisted:
            raise ValueError(f"Trade {trade.stp_trade_id} is already stored")

        model = self._mapper.to_model(trade)
        self._session.add(model)
        await self._session.flush()

        trade.stp_trade_id = model.stp_trade_id
        logger.debug(
            "stp_repository.trade_inserted",
            extra={"stp_trade_id": model.stp_trade_id, "trade_id": trade.trade_id},
        )
        return model.stp_trade_id

    async def insert_trade_system_link(self, link: TradeSystemLink) -> int:
        if not link.is_bound:
            raise ValueError("TradeSystemLink must be bound to a trade before insert")

        model = self._mapper.link_to_model(link)
        self._session.add(model)
        await self._session.flush()

        link.trade_system_link_id = model.trade_system_link_id
        return model.trade_system_link_id

    async def insert_workflow_event(self, event: TradeWorkflowEvent) -> int:
        if event.stp_trade_id is None:
            raise ValueError("TradeWorkflowEvent must be bound to a trade before insert")

        model = self._mapper.event_to_model(event)
        self._session.add(model)
        await self._session.flush()
        return model.workflow_event_id

    async def get_all_trade_system_summaries(self) -> list[TradeSystemSummary]:
        """Get every (trade, link) pair where neither side is deleted.

        Returns:
            Summaries ordered by stp_trade_id, then link id.
        """
        stmt = (
            select(TradeModel, TradeSystemLinkModel)
            .join(
                TradeSystemLinkModel,
                TradeSystemLinkModel.stp_trade_id == TradeModel.stp_trade_id,
            )
            .where(
                TradeModel.is_deleted.is_(False),
                TradeSystemLinkModel.is_deleted.is_(False),
            )
            .order_by(TradeModel.stp_trade_id, TradeSystemLinkModel.trade_system_link_id)
        )

        result = await self._session.execute(stmt)
        return [self._mapper.to_summary(trade, link) for trade, link in result.all()]
