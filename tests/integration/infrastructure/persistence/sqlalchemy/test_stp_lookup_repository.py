"""Integration tests for SQLAlchemyStpLookupRepository."""

import pytest

from tradehub.domain.trading.value_objects import ProductType, SystemCode
from tradehub.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyStpLookupRepository,
)


class TestSQLAlchemyStpLookupRepository:
    """Tests for SQLAlchemyStpLookupRepository."""

    @pytest.mark.asyncio
    async def test_expiry_cut(self, session_factory, reference_data):
        lookups = SQLAlchemyStpLookupRepository(session_factory)

        rule = await lookups.get_expiry_cut_by_currency_pair("eursek")

        assert rule is not None
        assert rule.expiry_cut == "NY"
        assert await lookups.get_expiry_cut_by_currency_pair("USDJPY") is None
        assert await lookups.get_expiry_cut_by_currency_pair("GBPUSD") is None

    @pytest.mark.asyncio
    async def test_broker_mapping(self, session_factory, reference_data):
        lookups = SQLAlchemyStpLookupRepository(session_factory)

        mapping = await lookups.get_broker_mapping("VOLBROKER", "VOLBROKER")

        assert mapping.normalized_broker_code == "VOLB"
        assert await lookups.get_broker_mapping("VOLBROKER", "OLD") is None

    @pytest.mark.asyncio
    async def test_portfolio_code(self, session_factory, reference_data):
        lookups = SQLAlchemyStpLookupRepository(session_factory)

        assert await lookups.get_portfolio_code(
            SystemCode.MX3, "EURSEK", ProductType.OPTION_VANILLA
        ) == "FXOPT_SCAND"
        assert await lookups.get_portfolio_code(
            SystemCode.CALYPSO, "EURSEK", ProductType.OPTION_VANILLA
        ) is None
