"""Test doubles and builders shared across the test suite."""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable

from tradehub.domain.messages.entities import InboundMessage
from tradehub.domain.parsing import InboundMessageParser, ParseResult
from tradehub.domain.trading.entities import Trade
from tradehub.domain.trading.repositories import StpLookupRepository
from tradehub.domain.trading.value_objects import (
    BrokerMapping,
    BuySell,
    ExpiryCutRule,
    ProductType,
    SystemCode,
)

RECEIVED_UTC = datetime(2025, 3, 3, 9, 30, tzinfo=timezone.utc)


def make_message(**overrides) -> InboundMessage:
    data = {
        "source_type": "FIX",
        "source_venue_code": "VOLBROKER",
        "received_utc": RECEIVED_UTC,
        "raw_payload": "8=FIX.4.4|35=AE",
        "fix_msg_type": "AE",
    }
    data.update(overrides)
    return InboundMessage(**data)


def make_trade(**overrides) -> Trade:
    data = {
        "trade_id": "VB-1001",
        "product_type": ProductType.OPTION_VANILLA,
        "source_type": "FIX",
        "source_venue_code": "VOLBROKER",
        "currency_pair": "EURSEK",
        "trade_date": date(2025, 3, 3),
        "execution_time_utc": RECEIVED_UTC,
        "buy_sell": BuySell.BUY,
        "notional": Decimal("10000000"),
        "notional_currency": "EUR",
        "settlement_date": date(2025, 5, 7),
    }
    data.update(overrides)
    return Trade(**data)


class FakeParser(InboundMessageParser):
    """Parser with scripted answers; records the messages it parsed."""

    def __init__(
        self,
        name: str,
        *,
        claims: bool | Callable[[InboundMessage], bool] = True,
        result: ParseResult | None = None,
        raises: Exception | None = None,
    ) -> None:
        self.name = name
        self._claims = claims
        self._result = result
        self._raises = raises
        self.parsed: list[InboundMessage] = []

    def can_parse(self, message: InboundMessage) -> bool:
        if callable(self._claims):
            return self._claims(message)
        return self._claims

    async def parse(self, message: InboundMessage) -> ParseResult:
        self.parsed.append(message)
        if self._raises is not None:
            raise self._raises
        return self._result


class BrokenCanParseParser(InboundMessageParser):
    name = "broken"

    def can_parse(self, message: InboundMessage) -> bool:
        raise KeyError("raw_payload")

    async def parse(self, message: InboundMessage) -> ParseResult:
        raise AssertionError("parse must not be reached")


class InMemoryLookupRepository(StpLookupRepository):
    def __init__(
        self,
        cuts: dict[str, ExpiryCutRule] | None = None,
        brokers: dict[tuple[str, str], BrokerMapping] | None = None,
        portfolios: dict[tuple[SystemCode, str, ProductType], str] | None = None,
    ) -> None:
        self.cuts = cuts or {}
        self.brokers = brokers or {}
        self.portfolios = portfolios or {}

    async def get_expiry_cut_by_currency_pair(self, currency_pair: str) -> ExpiryCutRule | None:
        return self.cuts.get(currency_pair)

    async def get_broker_mapping(self, source_venue_code: str, external_broker_code: str) -> BrokerMapping | None:
        return self.brokers.get((source_venue_code, external_broker_code))

    async def get_portfolio_code(
        self, system_code: SystemCode, currency_pair: str, product_type: ProductType
    ) -> str | None:
        return self.portfolios.get((system_code, currency_pair, product_type))
