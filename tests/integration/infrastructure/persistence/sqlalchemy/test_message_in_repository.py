"""Integration tests for SQLAlchemyMessageInRepository."""

import pytest

from fakes import make_message
from tradehub.domain.shared import AggregateNotFound
from tradehub.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyMessageInRepository,
)


class TestSQLAlchemyMessageInRepository:
    """Tests for SQLAlchemyMessageInRepository."""

    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, session_factory):
        message = make_message(fix_seq_num=812, external_trade_key="VB-1")

        async with session_factory() as session:
            repo = SQLAlchemyMessageInRepository(session)
            message_in_id = await repo.insert_message_in(message)
            await session.commit()

        assert message.id == message_in_id

        async with session_factory() as session:
            loaded = await SQLAlchemyMessageInRepository(session).get_by_id(message_in_id)

        assert loaded is not None
        assert loaded.source_type == "FIX"
        assert loaded.source_venue_code == "VOLBROKER"
        assert loaded.fix_msg_type == "AE"
        assert loaded.fix_seq_num == 812
        assert loaded.external_trade_key == "VB-1"
        assert loaded.parsed_flag is False
        assert loaded.parse_error is None

    @pytest.mark.asyncio
    async def test_insert_rejects_stored_message(self, session):
        with pytest.raises(ValueError):
            await SQLAlchemyMessageInRepository(session).insert_message_in(make_message(id=5))

    @pytest.mark.asyncio
    async def test_get_by_id_unknown(self, session):
        assert await SQLAlchemyMessageInRepository(session).get_by_id(999) is None

    @pytest.mark.asyncio
    async def test_unparsed_messages_oldest_first_and_bounded(self, session):
        repo = SQLAlchemyMessageInRepository(session)
        ids = [await repo.insert_message_in(make_message(external_trade_key=f"K{i}")) for i in range(4)]
        await repo.insert_message_in(make_message(parsed_flag=True, external_trade_key="done"))

        pending = await repo.get_unparsed_messages(3)

        assert [m.id for m in pending] == ids[:3]
        assert all(not m.parsed_flag for m in pending)

    @pytest.mark.asyncio
    async def test_update_parsing_state_only_touches_parse_columns(self, session_factory):
        async with session_factory() as session:
            repo = SQLAlchemyMessageInRepository(session)
            message_in_id = await repo.insert_message_in(make_message(raw_payload="35=AE|55=EURSEK"))
            await session.commit()

        async with session_factory() as session:
            repo = SQLAlchemyMessageInRepository(session)
            message = await repo.get_by_id(message_in_id)
            message.raw_payload = "tampered"
            message.mark_failed("No legs found in AE message.")
            await repo.update_parsing_state(message)
            await session.commit()

        async with session_factory() as session:
            repo = SQLAlchemyMessageInRepository(session)
            stored = await repo.get_by_id(message_in_id)
            pending = await repo.get_unparsed_messages(10)

        assert stored.parsed_flag is True
        assert stored.parsed_utc is not None
        assert stored.parse_error == "No legs found in AE message."
        assert stored.raw_payload == "35=AE|55=EURSEK"
        assert pending == []

    @pytest.mark.asyncio
    async def test_update_parsing_state_unknown_message(self, session):
        message = make_message(id=404)
        message.mark_parsed()

        with pytest.raises(AggregateNotFound):
            await SQLAlchemyMessageInRepository(session).update_parsing_state(message)
