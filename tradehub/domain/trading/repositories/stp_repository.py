"""StpRepository Port - the trade store gateway.

This is a PORT in Hexagonal Architecture (domain defines the interface).
Infrastructure layer implements it with SQLAlchemy.
"""

from abc import ABC, abstractmethod

from ..entities import Trade, TradeSystemLink, TradeSystemSummary, TradeWorkflowEvent


class StpRepository(ABC):
    """Abstract interface for normalized trade persistence.

    Every insert is synchronous from the caller's point of view and fails
    loudly (raises) on constraint violations; nothing is silently dropped.

    Example (orchestrator uses):
        >>> stp_trade_id = await stp_repo.insert_trade(trade)
        >>> await stp_repo.insert_trade_system_link(link.for_trade(stp_trade_id))
        >>> await stp_repo.insert_workflow_event(event.for_trade(stp_trade_id))
    """

    @abstractmethod
    async def insert_trade(self, trade: Trade) -> int:
        """Insert a new trade.

        Args:
            trade: Trade to insert (stp_trade_id must be None).

        Returns:
            Generated stp_trade_id (also set on the trade).
        """
        pass

    @abstractmethod
    async def insert_trade_system_link(self, link: TradeSystemLink) -> int:
        """Insert a system link owned by an inserted trade.

        Args:
            link: Link bound to its trade (stp_trade_id set).

        Returns:
            Generated trade_system_link_id.

        Raises:
            ValueError: If the link is not bound to a trade.
        """
        pass

    @abstractmethod
    async def insert_workflow_event(self, event: TradeWorkflowEvent) -> int:
        """Append a workflow event owned by an inserted trade.

        Args:
            event: Event bound to its trade (stp_trade_id set).

        Returns:
            Generated trade_workflow_event_id.

        Raises:
            ValueError: If the event is not bound to a trade.
        """
        pass

    @abstractmethod
    async def get_all_trade_system_summaries(self) -> list[TradeSystemSummary]:
        """Get every non-deleted (trade, system link) pair.

        Returns:
            Summary rows for blotters and read services.
        """
        pass
