"""GetTradeSystemSummaries Handler - read model for blotters."""

from tradehub.application.parsing.dtos import TradeSystemSummaryDTO
from tradehub.application.parsing.queries import GetTradeSystemSummariesQuery
from tradehub.application.shared import QueryHandler, UnitOfWork


class GetTradeSystemSummariesHandler(
    QueryHandler[GetTradeSystemSummariesQuery, list[TradeSystemSummaryDTO]]
):
    """Return every live (trade, system link) row, optionally filtered."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def handle(self, query: GetTradeSystemSummariesQuery) -> list[TradeSystemSummaryDTO]:
        async with self._uow:
            summaries = await self._uow.stp.get_all_trade_system_summaries()

        if query.system_code is not None:
            summaries = [s for s in summaries if s.system_code is query.system_code]
        if query.status is not None:
            summaries = [s for s in summaries if s.status is query.status]

        return [TradeSystemSummaryDTO.from_entity(s) for s in summaries]
