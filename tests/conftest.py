"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from tradehub.infrastructure.persistence.sqlalchemy import create_session_factory
from tradehub.infrastructure.persistence.sqlalchemy.models import (
    Base,
    BrokerMappingModel,
    ExpiryCutRuleModel,
    PortfolioMappingModel,
)


@pytest.fixture
def mock_uow():
    """Mock Unit of Work with both gateways as AsyncMocks."""
    uow = MagicMock()
    uow.messages = MagicMock()
    uow.messages.get_by_id = AsyncMock(return_value=None)
    uow.messages.get_unparsed_messages = AsyncMock(return_value=[])
    uow.messages.update_parsing_state = AsyncMock()

    uow.stp = MagicMock()
    ids = iter(range(1, 1000))
    uow.stp.insert_trade = AsyncMock(side_effect=lambda trade: next(ids))
    uow.stp.insert_trade_system_link = AsyncMock(return_value=1)
    uow.stp.insert_workflow_event = AsyncMock(return_value=1)

    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Make it work as async context manager
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)

    return uow


@pytest.fixture
def volbroker_ae_payload() -> str:
    """Option + forward hedge AE package on EURSEK (pipe-separated)."""
    fields = [
        "8=FIX.4.4",
        "35=AE",
        "34=812",
        "55=EUR/SEK",
        "30=XVOL",
        "571=VB-TRD-55120",
        "17=EXEC-9",
        "75=20250303",
        "60=20250303-09:31:12.250",
        "194=11.0520",
        "195=0.0415",
        "1903=5493001KJTIIGC8Y1R12EXTRA",
        "54=1",
        # Option leg
        "600=EURSEK",
        "609=OPT",
        "624=B",
        "620=2M",
        "764=C",
        "942=EUR",
        "612=11.25",
        "611=20250505",
        "598=NYC",
        "687=10",
        "556=EUR",
        "614=45210.50",
        "602=EZ1234567890",
        "2893=VBLEGUTI001",
        "248=20250507",
        "688=USI",
        "689=TVTIC0001",
        # Hedge leg
        "600=EURSEK",
        "609=FWD",
        "624=C",
        "687=4.2",
        "556=EUR",
        "248=20250507",
        "637=11.0935",
        "2893=VBLEGUTI002",
        "688=SEFEXEC",
        "689=IGNORED",
    ]
    return "|".join(fields)


@pytest.fixture
async def engine(tmp_path):
    """Async SQLite engine on a per-test database file with all tables created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'stp.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def session_factory(engine):
    """Async session factory matching the production settings."""
    return create_session_factory(engine)


@pytest.fixture
async def reference_data(session_factory):
    """Seed the lookup tables, including inactive rows that must be ignored."""
    async with session_factory() as session:
        session.add_all([
            ExpiryCutRuleModel(currency_pair="EURSEK", expiry_cut="NY"),
            ExpiryCutRuleModel(currency_pair="USDJPY", expiry_cut="TKY", is_active=False),
            BrokerMappingModel(
                source_venue_code="VOLBROKER",
                external_broker_code="VOLBROKER",
                normalized_broker_code="VOLB",
            ),
            BrokerMappingModel(
                source_venue_code="VOLBROKER",
                external_broker_code="OLD",
                normalized_broker_code="VOLB_OLD",
                is_active=False,
            ),
            PortfolioMappingModel(
                system_code="MX3",
                currency_pair="EURSEK",
                product_type="OPTION_VANILLA",
                portfolio_code="FXOPT_SCAND",
            ),
        ])
        await session.commit()
