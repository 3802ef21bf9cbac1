"""ProcessMessage Handler - parse one inbound message and persist its trades.

Every path through an unparsed message ends in exactly one parse-state
writeback: either ``mark_parsed`` or ``mark_failed`` with a diagnostic.
"""

import logging
import traceback
from collections.abc import Sequence

from tradehub.application.parsing.commands import ProcessMessageCommand
from tradehub.application.parsing.dtos import (
    MessageProcessingResultDTO,
    ParseFailureKind,
    ProcessingOutcome,
)
from tradehub.application.shared import CommandHandler, UnitOfWork
from tradehub.domain.messages.entities import InboundMessage
from tradehub.domain.parsing import ParseResult, ParserRegistry, TradeBundle

logger = logging.getLogger(__name__)

NO_PARSER_ERROR = "No parser available for this message."
EMPTY_RESULT_ERROR = "Parser returned success but no trades."
MISSING_TRADE_ERROR = "Parser returned a trade bundle without Trade."
INVALID_RESULT_ERROR = "Parser returned {type_name} instead of ParseResult."


class ProcessMessageHandler(
    CommandHandler[ProcessMessageCommand, MessageProcessingResultDTO]
):
    """Handler for ProcessMessage command.

    Flow for an unparsed message:
    1. **Select Parser**: first parser in the registry whose can_parse is true
    2. **Parse**: any exception is captured as the message's error text
    3. **Validate Result**: rejected or empty results fail the message
    4. **Persist Bundles**: per bundle insert trade, then links and events
       bound to the new stp_trade_id, then commit
    5. **Write Back**: mark parsed (or failed) and commit

    Idempotent: unknown ids and already-parsed messages are left untouched.
    A bundle is atomic on its own; bundles committed before a failing one stay
    persisted.

    Example:
        >>> handler = ProcessMessageHandler(uow=uow, registry=registry)
        >>> result = await handler.handle(ProcessMessageCommand(message_in_id=42))
        >>> if result.succeeded:
        ...     print(f"Persisted trades {result.stp_trade_ids}")
        ... else:
        ...     print(f"{result.failure_kind}: {result.error}")
    """

    def __init__(self, uow: UnitOfWork, registry: ParserRegistry) -> None:
        """Initialize handler.

        Args:
            uow: Unit of Work for transaction management.
            registry: Ordered parser registry.
        """
        self._uow = uow
        self._registry = registry

    async def handle(self, command: ProcessMessageCommand) -> MessageProcessingResultDTO:
        """Process one message.

        Args:
            command: ProcessMessageCommand with the message id.

        Returns:
            MessageProcessingResultDTO describing the outcome.

        Raises:
            ParserContractError: If a parser's can_parse raised.
        """
        message_in_id = command.message_in_id

        async with self._uow:
            message = await self._uow.messages.get_by_id(message_in_id)

            if message is None:
                logger.warning(
                    "process_message.not_found",
                    extra={"message_in_id": message_in_id},
                )
                return MessageProcessingResultDTO(
                    message_in_id=message_in_id,
                    outcome=ProcessingOutcome.NOT_FOUND,
                )

            if not message.can_process:
                logger.debug(
                    "process_message.already_parsed",
                    extra={"message_in_id": message_in_id},
                )
                return MessageProcessingResultDTO(
                    message_in_id=message_in_id,
                    outcome=ProcessingOutcome.ALREADY_PARSED,
                )

            parser = self._registry.find_parser(message)
            if parser is None:
                return await self._fail(
                    message, ParseFailureKind.NO_PARSER_AVAILABLE, NO_PARSER_ERROR
                )

            logger.info(
                "process_message.started",
                extra={
                    "message_in_id": message_in_id,
                    "parser": parser.name,
                    "source_type": message.source_type,
                    "source_venue_code": message.source_venue_code,
                },
            )

            try:
                result = await parser.parse(message)
            except Exception:
                return await self._fail(
                    message,
                    ParseFailureKind.UNHANDLED_PARSER_FAULT,
                    traceback.format_exc(),
                    parser_name=parser.name,
                )

            if not isinstance(result, ParseResult):
                return await self._fail(
                    message,
                    ParseFailureKind.UNHANDLED_PARSER_FAULT,
                    INVALID_RESULT_ERROR.format(type_name=type(result).__name__),
                    parser_name=parser.name,
                )

            if not result.success:
                return await self._fail(
                    message,
                    ParseFailureKind.PARSER_REJECTED,
                    result.error,
                    parser_name=parser.name,
                )

            if not result.trades:
                return await self._fail(
                    message,
                    ParseFailureKind.EMPTY_RESULT,
                    EMPTY_RESULT_ERROR,
                    parser_name=parser.name,
                )

            stp_trade_ids: list[int] = []
            for bundle in result.trades:
                if bundle is None or bundle.trade is None:
                    return await self._fail(
                        message,
                        ParseFailureKind.MALFORMED_BUNDLE,
                        MISSING_TRADE_ERROR,
                        parser_name=parser.name,
                        stp_trade_ids=stp_trade_ids,
                    )

                try:
                    stp_trade_id = await self._persist_bundle(message_in_id, bundle)
                except Exception:
                    error = traceback.format_exc()
                    await self._uow.rollback()
                    return await self._fail(
                        message,
                        ParseFailureKind.PERSISTENCE_FAULT,
                        error,
                        parser_name=parser.name,
                        stp_trade_ids=stp_trade_ids,
                    )

                stp_trade_ids.append(stp_trade_id)

            message.mark_parsed()
            await self._uow.messages.update_parsing_state(message)
            await self._uow.commit()

            logger.info(
                "process_message.succeeded",
                extra={
                    "message_in_id": message_in_id,
                    "parser": parser.name,
                    "trades_count": len(stp_trade_ids),
                },
            )

            return MessageProcessingResultDTO(
                message_in_id=message_in_id,
                outcome=ProcessingOutcome.SUCCEEDED,
                parser_name=parser.name,
                stp_trade_ids=tuple(stp_trade_ids),
            )

    async def _persist_bundle(self, message_in_id: int, bundle: TradeBundle) -> int:
        """Insert one bundle and commit it.

        The trade identity is produced by the insert and handed explicitly to
        the link and event copies before their own inserts.
        """
        trade = bundle.trade.for_message(message_in_id)
        stp_trade_id = await self._uow.stp.insert_trade(trade)

        for link in bundle.system_links:
            await self._uow.stp.insert_trade_system_link(link.for_trade(stp_trade_id))

        for event in bundle.workflow_events:
            await self._uow.stp.insert_workflow_event(event.for_trade(stp_trade_id))

        await self._uow.commit()

        logger.debug(
            "process_message.bundle_persisted",
            extra={
                "message_in_id": message_in_id,
                "stp_trade_id": stp_trade_id,
                "links": len(bundle.system_links),
                "events": len(bundle.workflow_events),
            },
        )
        return stp_trade_id

    async def _fail(
        self,
        message: InboundMessage,
        kind: ParseFailureKind,
        error: str,
        *,
        parser_name: str | None = None,
        stp_trade_ids: Sequence[int] = (),
    ) -> MessageProcessingResultDTO:
        message.mark_failed(error)
        await self._uow.messages.update_parsing_state(message)
        await self._uow.commit()

        logger.warning(
            "process_message.failed",
            extra={
                "message_in_id": message.id,
                "parser": parser_name,
                "failure_kind": kind.value,
                "error": error.splitlines()[-1] if error else error,
                "trades_persisted": len(stp_trade_ids),
            },
        )

        return MessageProcessingResultDTO(
            message_in_id=message.id,
            outcome=ProcessingOutcome.FAILED,
            parser_name=parser_name,
            failure_kind=kind,
            error=error,
            stp_trade_ids=tuple(stp_trade_ids),
        )
