"""Unit tests for ParseResult and ParserRegistry."""

import pytest

from fakes import BrokenCanParseParser, FakeParser, make_message, make_trade
from tradehub.domain.parsing import (
    ParseResult,
    ParserContractError,
    ParserRegistry,
    TradeBundle,
)


class TestParseResult:
    def test_ok_keeps_bundle_order(self):
        first = TradeBundle(trade=make_trade(trade_id="A"))
        second = TradeBundle(trade=make_trade(trade_id="B"))

        result = ParseResult.ok([first, second])

        assert result.success is True
        assert result.error is None
        assert [b.trade.trade_id for b in result.trades] == ["A", "B"]

    def test_ok_with_no_bundles_is_constructible(self):
        result = ParseResult.ok([])

        assert result.success is True
        assert result.trades == ()

    def test_failed_carries_error(self):
        result = ParseResult.failed("No legs found in AE message.")

        assert result.success is False
        assert result.error == "No legs found in AE message."
        assert result.trades == ()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"success": False},
            {"success": False, "error": "  "},
            {"success": True, "error": "unexpected"},
            {"success": False, "error": "bad", "trades": (TradeBundle(trade=None),)},
        ],
    )
    def test_invalid_combinations_rejected(self, kwargs):
        with pytest.raises(ValueError):
            ParseResult(**kwargs)


class TestParserRegistry:
    def test_first_matching_parser_wins(self):
        first = FakeParser("first", claims=False)
        second = FakeParser("second")
        third = FakeParser("third")
        registry = ParserRegistry([first, second, third])

        assert registry.find_parser(make_message()) is second
        assert registry.names == ["first", "second", "third"]
        assert len(registry) == 3

    def test_no_parser_returns_none(self):
        registry = ParserRegistry([FakeParser("mail", claims=False)])

        assert registry.find_parser(make_message()) is None

    def test_empty_registry(self):
        assert ParserRegistry().find_parser(make_message()) is None

    def test_can_parse_fault_is_contract_error(self):
        registry = ParserRegistry([BrokenCanParseParser(), FakeParser("never")])

        with pytest.raises(ParserContractError) as exc_info:
            registry.find_parser(make_message(id=5))

        assert exc_info.value.context["message_in_id"] == 5
        assert isinstance(exc_info.value.__cause__, KeyError)
