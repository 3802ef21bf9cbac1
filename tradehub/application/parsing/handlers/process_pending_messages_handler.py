"""ProcessPendingMessages Handler - the batch loop of the STP pipeline."""

import logging

from tradehub.application.parsing.commands import (
    ProcessMessageCommand,
    ProcessPendingMessagesCommand,
)
from tradehub.application.parsing.dtos import (
    BatchProcessingResultDTO,
    MessageProcessingResultDTO,
    ProcessingOutcome,
)
from tradehub.application.shared import CommandHandler, UnitOfWork
from tradehub.config import bind_message_context, clear_message_context
from tradehub.domain.parsing import ParserContractError

from .process_message_handler import ProcessMessageHandler

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class ProcessPendingMessagesHandler(
    CommandHandler[ProcessPendingMessagesCommand, BatchProcessingResultDTO]
):
    """Handler for ProcessPendingMessages command.

    Pulls a bounded batch of unparsed messages and runs ProcessMessage for
    each one, sequentially, in store order. A fault while handling one message
    (e.g. the parse-state writeback itself failing) is logged and the batch
    moves on; only ParserContractError aborts the run.

    Example:
        >>> handler = ProcessPendingMessagesHandler(
        ...     uow=uow,
        ...     message_handler=ProcessMessageHandler(uow=uow, registry=registry),
        ...     batch_size=settings.parse_batch_size,
        ... )
        >>> summary = await handler.handle(ProcessPendingMessagesCommand())
        >>> print(f"{summary.succeeded}/{summary.fetched} parsed")
    """

    def __init__(
        self,
        uow: UnitOfWork,
        message_handler: ProcessMessageHandler,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        """Initialize handler.

        Args:
            uow: Unit of Work used to pull the batch.
            message_handler: Handler processing each message.
            batch_size: Default upper bound on messages per run.
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self._uow = uow
        self._message_handler = message_handler
        self._batch_size = batch_size

    async def handle(self, command: ProcessPendingMessagesCommand) -> BatchProcessingResultDTO:
        """Run one batch.

        Args:
            command: ProcessPendingMessagesCommand with optional size override.

        Returns:
            BatchProcessingResultDTO with per-outcome counts.

        Raises:
            ParserContractError: If a registered parser violates its contract.
        """
        max_count = command.max_messages or self._batch_size

        async with self._uow:
            pending = await self._uow.messages.get_unparsed_messages(max_count)
        message_ids = [message.id for message in pending]

        if not message_ids:
            logger.debug("process_pending_messages.no_messages")
            return BatchProcessingResultDTO()

        logger.info(
            "process_pending_messages.started",
            extra={"fetched": len(message_ids), "max_count": max_count},
        )

        results: list[MessageProcessingResultDTO] = []
        errored = 0

        for message_in_id in message_ids:
            bind_message_context(message_in_id)
            try:
                result = await self._message_handler.handle(
                    ProcessMessageCommand(message_in_id=message_in_id)
                )
            except ParserContractError:
                logger.error(
                    "process_pending_messages.parser_contract_violated",
                    extra={"message_in_id": message_in_id},
                    exc_info=True,
                )
                raise
            except Exception as e:
                errored += 1
                logger.error(
                    "process_pending_messages.message_errored",
                    extra={"message_in_id": message_in_id, "error": str(e)},
                    exc_info=True,
                )
                continue
            finally:
                clear_message_context()

            results.append(result)

        summary = self._build_result(len(message_ids), results, errored)

        logger.info(
            "process_pending_messages.completed",
            extra={
                "fetched": summary.fetched,
                "succeeded": summary.succeeded,
                "failed": summary.failed,
                "skipped": summary.skipped,
                "errored": summary.errored,
                "trades_persisted": summary.trades_persisted,
            },
        )
        return summary

    @staticmethod
    def _build_result(
        fetched: int,
        results: list[MessageProcessingResultDTO],
        errored: int,
    ) -> BatchProcessingResultDTO:
        def count(outcome: ProcessingOutcome) -> int:
            return sum(1 for r in results if r.outcome is outcome)

        return BatchProcessingResultDTO(
            fetched=fetched,
            succeeded=count(ProcessingOutcome.SUCCEEDED),
            failed=count(ProcessingOutcome.FAILED),
            skipped=count(ProcessingOutcome.ALREADY_PARSED) + count(ProcessingOutcome.NOT_FOUND),
            errored=errored,
            trades_persisted=sum(len(r.stp_trade_ids) for r in results),
            results=results,
        )
