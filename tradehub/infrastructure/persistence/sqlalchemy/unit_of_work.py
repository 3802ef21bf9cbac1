"""SQLAlchemy Unit of Work implementation."""

import logging
from types import TracebackType
from typing import Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tradehub.application.shared import UnitOfWork
from tradehub.domain.messages.repositories import MessageInRepository
from tradehub.domain.trading.repositories import StpRepository
from tradehub.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyMessageInRepository,
    SQLAlchemyStpRepository,
)

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of Unit of Work pattern.

    Responsibilities:
    - Owning one AsyncSession per ``async with`` block
    - Transaction management (commit/rollback)
    - Automatic rollback on exceptions
    - Lazy initialization of repositories

    The same instance may be entered again after the previous block exited;
    every entry gets a fresh session.

    Example:
        >>> session_factory = async_sessionmaker(engine, expire_on_commit=False)
        >>> uow = SQLAlchemyUnitOfWork(session_factory)
        >>>
        >>> async with uow:
        ...     stp_trade_id = await uow.stp.insert_trade(trade)
        ...     await uow.stp.insert_trade_system_link(link.for_trade(stp_trade_id))
        ...     await uow.commit()
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory.
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

        # Repository instances (lazy initialized)
        self._messages: Optional[MessageInRepository] = None
        self._stp: Optional[StpRepository] = None

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        if self._session is not None:
            raise RuntimeError("Unit of Work already started")

        self._session = self._session_factory()
        logger.debug("unit_of_work.started")
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Exit async context manager.

        Note:
            - exc_type is not None → rollback
            - Uncommitted work is discarded on close
            - Always closes the session
        """
        try:
            if exc_type is not None:
                await self.rollback()
                logger.warning(
                    "unit_of_work.rolled_back",
                    extra={"exception_type": exc_type.__name__},
                )
        finally:
            if self._session:
                await self._session.close()
                self._session = None
                self._messages = None  # Clear repository references
                self._stp = None

            logger.debug("unit_of_work.closed")

    async def commit(self) -> None:
        """Commit transaction.

        Raises:
            Exception: If commit failed (DB error, constraint violation, etc.).
        """
        session = self._require_session()

        try:
            await session.commit()
            logger.debug("unit_of_work.committed")
        except Exception as e:
            logger.error("unit_of_work.commit_failed", extra={"error": str(e)})
            await self.rollback()
            raise

    async def rollback(self) -> None:
        await self._require_session().rollback()
        logger.debug("unit_of_work.rolled_back")

    @property
    def messages(self) -> MessageInRepository:
        """Get MessageInRepository bound to the current session."""
        if self._messages is None:
            self._messages = SQLAlchemyMessageInRepository(self._require_session())
        return self._messages

    @property
    def stp(self) -> StpRepository:
        """Get StpRepository bound to the current session."""
        if self._stp is None:
            self._stp = SQLAlchemyStpRepository(self._require_session())
        return self._stp

    def _require_session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("Unit of Work not started (use async with)")
        return self._session


# Factory function for dependency injection
def create_unit_of_work(
    session_factory: async_sessionmaker[AsyncSession],
) -> SQLAlchemyUnitOfWork:
    """Factory for creating a Unit of Work.

    Example:
        >>> engine = create_async_engine("postgresql+asyncpg://...")
        >>> session_factory = async_sessionmaker(engine, expire_on_commit=False)
        >>> uow = create_unit_of_work(session_factory)
    """
    return SQLAlchemyUnitOfWork(session_factory)
