"""End-to-end tests: staged messages → batch run → trades in the STP store.

Runs the real handlers, parser and Unit of Work against a SQLite database.
"""

import pytest
from sqlalchemy import func, select

from fakes import FakeParser, make_message, make_trade
from tradehub.application.parsing.commands import ProcessPendingMessagesCommand
from tradehub.application.parsing.handlers import (
    GetTradeSystemSummariesHandler,
    ProcessMessageHandler,
    ProcessPendingMessagesHandler,
)
from tradehub.application.parsing.queries import GetTradeSystemSummariesQuery
from tradehub.domain.parsing import ParseResult, ParserRegistry, TradeBundle
from tradehub.domain.trading.entities import TradeSystemLink
from tradehub.domain.trading.value_objects import SystemCode
from tradehub.infrastructure.parsers import VolbrokerFixAeParser
from tradehub.infrastructure.persistence.sqlalchemy import SQLAlchemyUnitOfWork
from tradehub.infrastructure.persistence.sqlalchemy.models import (
    MessageInModel,
    TradeModel,
    TradeWorkflowEventModel,
)
from tradehub.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyMessageInRepository,
    SQLAlchemyStpLookupRepository,
)


async def _stage(session_factory, *messages):
    async with session_factory() as session:
        repo = SQLAlchemyMessageInRepository(session)
        ids = [await repo.insert_message_in(message) for message in messages]
        await session.commit()
    return ids


async def _count(session_factory, model):
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model))


async def _load_messages(session_factory):
    async with session_factory() as session:
        result = await session.execute(select(MessageInModel).order_by(MessageInModel.message_in_id))
        return list(result.scalars())


def _pipeline(session_factory, *extra_parsers, batch_size=100):
    lookups = SQLAlchemyStpLookupRepository(session_factory)
    registry = ParserRegistry([VolbrokerFixAeParser(lookups, initiator_id="STP_PARSER"), *extra_parsers])
    uow = SQLAlchemyUnitOfWork(session_factory)
    return ProcessPendingMessagesHandler(
        uow=uow,
        message_handler=ProcessMessageHandler(uow=uow, registry=registry),
        batch_size=batch_size,
    )


class TestParsePipeline:
    """End-to-end tests for the batch parse pipeline."""

    @pytest.mark.asyncio
    async def test_volbroker_package_is_persisted(
        self, session_factory, reference_data, volbroker_ae_payload
    ):
        """Test one AE message becomes an option trade and a hedge trade."""
        # Arrange
        [message_in_id] = await _stage(session_factory, make_message(raw_payload=volbroker_ae_payload))

        # Act
        summary = await _pipeline(session_factory).handle(ProcessPendingMessagesCommand())

        # Assert
        assert summary.fetched == 1
        assert summary.succeeded == 1
        assert summary.trades_persisted == 2

        async with session_factory() as session:
            trades = list((await session.execute(
                select(TradeModel).order_by(TradeModel.stp_trade_id)
            )).scalars())

        assert [t.product_type for t in trades] == ["OPTION_VANILLA", "FWD"]
        assert {t.message_in_id for t in trades} == {message_in_id}
        assert trades[0].cut == "NY"
        assert trades[0].broker_code == "VOLB"
        assert trades[0].portfolio_mx3 == "FXOPT_SCAND"
        assert trades[0].uti == "5493001KJTIIGC8Y1R12TVTIC0001"
        assert trades[1].hedge_type == "Forward"
        assert await _count(session_factory, TradeWorkflowEventModel) == 0

        [stored] = await _load_messages(session_factory)
        assert stored.parsed_flag is True
        assert stored.parse_error is None
        assert stored.parsed_utc is not None

    @pytest.mark.asyncio
    async def test_missing_cut_persists_warning_event(self, session_factory, volbroker_ae_payload):
        await _stage(session_factory, make_message(raw_payload=volbroker_ae_payload))

        await _pipeline(session_factory).handle(ProcessPendingMessagesCommand())

        async with session_factory() as session:
            [event] = list((await session.execute(select(TradeWorkflowEventModel))).scalars())
            option = await session.get(TradeModel, event.stp_trade_id)

        assert event.event_type == "WARNING"
        assert event.field_name == "Cut"
        assert event.initiator_id == "STP_PARSER"
        assert option.product_type == "OPTION_VANILLA"
        assert option.cut == ""

    @pytest.mark.asyncio
    async def test_mixed_batch(self, session_factory, reference_data, volbroker_ae_payload):
        """Test unclaimed, valid and rejected messages in one batch."""
        # Arrange
        await _stage(
            session_factory,
            make_message(source_type="MAIL", source_venue_code="BROKERX", fix_msg_type=None, raw_payload="Hi"),
            make_message(raw_payload=volbroker_ae_payload),
            make_message(raw_payload="35=AE|55=EURSEK|54=1"),
        )

        # Act
        summary = await _pipeline(session_factory).handle(ProcessPendingMessagesCommand())

        # Assert
        mail, good, no_legs = await _load_messages(session_factory)
        assert (mail.parsed_flag, mail.parse_error) == (True, "No parser available for this message.")
        assert (good.parsed_flag, good.parse_error) == (True, None)
        assert (no_legs.parsed_flag, no_legs.parse_error) == (True, "No legs found in AE message.")

        assert summary.succeeded == 1
        assert summary.failed == 2
        assert await _count(session_factory, TradeModel) == 2

    @pytest.mark.asyncio
    async def test_second_run_adds_nothing(self, session_factory, reference_data, volbroker_ae_payload):
        await _stage(session_factory, make_message(raw_payload=volbroker_ae_payload))
        pipeline = _pipeline(session_factory)

        await pipeline.handle(ProcessPendingMessagesCommand())
        second = await pipeline.handle(ProcessPendingMessagesCommand())

        assert second.fetched == 0
        assert await _count(session_factory, TradeModel) == 2

    @pytest.mark.asyncio
    async def test_batch_size_bounds_each_run(self, session_factory, reference_data, volbroker_ae_payload):
        await _stage(session_factory, *(make_message(raw_payload=volbroker_ae_payload) for _ in range(3)))
        pipeline = _pipeline(session_factory, batch_size=2)

        first = await pipeline.handle(ProcessPendingMessagesCommand())
        second = await pipeline.handle(ProcessPendingMessagesCommand())

        assert (first.fetched, second.fetched) == (2, 1)
        assert await _count(session_factory, TradeModel) == 6

    @pytest.mark.asyncio
    async def test_parsed_flag_and_error_are_consistent(self, session_factory):
        """Test every message ends parsed with an error only on failure."""
        # Arrange
        def scripted(message):
            key = message.external_trade_key
            if key == "boom":
                raise RuntimeError("parser bug")
            if key == "empty":
                return ParseResult.ok([])
            return ParseResult.ok([
                TradeBundle(
                    trade=make_trade(trade_id=key),
                    system_links=[TradeSystemLink(system_code=SystemCode.MX3)],
                )
            ])

        class ScriptedParser(FakeParser):
            async def parse(self, message):
                return scripted(message)

        mail_parser = ScriptedParser("mail", claims=lambda m: m.source_type == "MAIL")
        await _stage(
            session_factory,
            *(
                make_message(source_type="MAIL", source_venue_code="BANK", fix_msg_type=None, external_trade_key=key)
                for key in ("ok-1", "boom", "empty", "ok-2")
            ),
        )

        # Act
        summary = await _pipeline(session_factory, mail_parser).handle(ProcessPendingMessagesCommand())

        # Assert
        messages = await _load_messages(session_factory)
        assert all(m.parsed_flag for m in messages)
        assert all(m.parsed_utc is not None for m in messages)
        assert [m.parse_error is None for m in messages] == [True, False, False, True]
        assert "RuntimeError: parser bug" in messages[1].parse_error
        assert summary.succeeded == 2
        assert summary.failed == 2

        dtos = await GetTradeSystemSummariesHandler(SQLAlchemyUnitOfWork(session_factory)).handle(
            GetTradeSystemSummariesQuery(system_code=SystemCode.MX3)
        )
        assert [d.trade_id for d in dtos] == ["ok-1", "ok-2"]
        assert {d.status for d in dtos} == {"NEW"}

    @pytest.mark.asyncio
    async def test_malformed_parser_output_is_not_reprocessed(self, session_factory):
        """Test a None bundle or a non-ParseResult return fails the message once."""
        # Arrange
        class MalformedParser(FakeParser):
            async def parse(self, message):
                if message.external_trade_key == "none-bundle":
                    return ParseResult.ok([TradeBundle(trade=make_trade(trade_id="kept")), None])
                return None

        parser = MalformedParser("mail", claims=lambda m: m.source_type == "MAIL")
        await _stage(
            session_factory,
            *(
                make_message(source_type="MAIL", source_venue_code="BANK", fix_msg_type=None, external_trade_key=key)
                for key in ("none-bundle", "none-result")
            ),
        )
        pipeline = _pipeline(session_factory, parser)

        # Act
        runs = [await pipeline.handle(ProcessPendingMessagesCommand()) for _ in range(3)]

        # Assert
        assert [(r.fetched, r.failed, r.errored) for r in runs] == [(2, 2, 0), (0, 0, 0), (0, 0, 0)]
        none_bundle, none_result = await _load_messages(session_factory)
        assert none_bundle.parsed_flag is True
        assert none_bundle.parse_error == "Parser returned a trade bundle without Trade."
        assert none_result.parsed_flag is True
        assert none_result.parse_error == "Parser returned NoneType instead of ParseResult."
        assert await _count(session_factory, TradeModel) == 1
