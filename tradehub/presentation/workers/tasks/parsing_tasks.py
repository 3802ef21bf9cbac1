"""STP Parsing Celery Tasks.

Thin wrappers around the application layer handlers.

Architecture:
    Celery Task → ProcessPendingMessagesHandler → ProcessMessageHandler
                                                → ParserRegistry → parsers
                                                → SQLAlchemyUnitOfWork
"""

import asyncio
import logging
from functools import wraps
from typing import Any

from celery import shared_task
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tradehub.application.parsing.commands import (
    ProcessMessageCommand,
    ProcessPendingMessagesCommand,
)
from tradehub.application.parsing.handlers import (
    ProcessMessageHandler,
    ProcessPendingMessagesHandler,
)
from tradehub.config import bind_message_context, clear_message_context, get_settings
from tradehub.domain.parsing import ParserRegistry
from tradehub.infrastructure.parsers import build_parser_registry
from tradehub.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyUnitOfWork,
    create_engine_from_settings,
    create_session_factory,
)
from tradehub.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyStpLookupRepository,
)

logger = logging.getLogger(__name__)

# Engine, session factory and parsers (created once per worker)
_session_factory: async_sessionmaker[AsyncSession] | None = None
_registry: ParserRegistry | None = None
_loop: asyncio.AbstractEventLoop | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create async session factory (singleton per worker)."""
    global _session_factory

    if _session_factory is None:
        engine = create_engine_from_settings(get_settings())
        _session_factory = create_session_factory(engine)

    return _session_factory


def get_parser_registry() -> ParserRegistry:
    """Get or create the configured parser registry (singleton per worker)."""
    global _registry

    if _registry is None:
        lookups = SQLAlchemyStpLookupRepository(get_session_factory())
        _registry = build_parser_registry(get_settings(), lookups)

    return _registry


def build_handlers() -> tuple[ProcessMessageHandler, ProcessPendingMessagesHandler]:
    uow = SQLAlchemyUnitOfWork(get_session_factory())
    message_handler = ProcessMessageHandler(uow=uow, registry=get_parser_registry())
    batch_handler = ProcessPendingMessagesHandler(
        uow=uow,
        message_handler=message_handler,
        batch_size=get_settings().parse_batch_size,
    )
    return message_handler, batch_handler


def async_task(f):
    """Decorator to run an async function in a Celery task.

    Uses one event loop per worker process: pooled connections are bound to
    the loop that opened them.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        global _loop
        if _loop is None or _loop.is_closed():
            _loop = asyncio.new_event_loop()
            asyncio.set_event_loop(_loop)
        return _loop.run_until_complete(f(*args, **kwargs))
    return wrapper


@shared_task(bind=True, max_retries=0)
@async_task
async def process_pending_messages(
    self,
    max_messages: int | None = None,
) -> dict[str, Any]:
    """Run one batch of the parse pipeline.

    Args:
        max_messages: Batch size override (default: settings.parse_batch_size).

    Returns:
        Dict with batch processing summary.

    Example (Celery Beat):
        beat_schedule = {
            'process-pending-messages': {
                'task': 'tradehub.presentation.workers.tasks.parsing_tasks.process_pending_messages',
                'schedule': 10.0,
                'kwargs': {'max_messages': 100},
            },
        }
    """
    _, handler = build_handlers()

    try:
        summary = await handler.handle(
            ProcessPendingMessagesCommand(max_messages=max_messages)
        )
    except Exception as e:
        logger.error(
            "process_pending_messages.error",
            extra={"error": str(e)},
            exc_info=True,
        )
        raise

    return {
        "status": "completed",
        "fetched": summary.fetched,
        "succeeded": summary.succeeded,
        "failed": summary.failed,
        "skipped": summary.skipped,
        "errored": summary.errored,
        "trades_persisted": summary.trades_persisted,
    }


@shared_task(bind=True, max_retries=0)
@async_task
async def process_message(self, message_in_id: int) -> dict[str, Any]:
    """Parse a single message by id (manual reprocessing, tooling).

    Args:
        message_in_id: Id of the staged message.

    Returns:
        Dict with the message outcome.

    Example:
        >>> process_message.delay(message_in_id=42)
    """
    handler, _ = build_handlers()
    bind_message_context(message_in_id, task_id=self.request.id)

    try:
        result = await handler.handle(ProcessMessageCommand(message_in_id=message_in_id))
    except Exception as e:
        logger.error(
            "process_message.error",
            extra={"message_in_id": message_in_id, "error": str(e)},
            exc_info=True,
        )
        raise
    finally:
        clear_message_context()

    return {
        "status": result.outcome.value,
        "message_in_id": result.message_in_id,
        "parser": result.parser_name,
        "failure_kind": result.failure_kind.value if result.failure_kind else None,
        "error": result.error,
        "stp_trade_ids": list(result.stp_trade_ids),
    }
