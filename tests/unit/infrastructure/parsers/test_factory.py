"""Tests for the parser registry factory."""

import pytest

from fakes import InMemoryLookupRepository, make_message
from tradehub.config import Settings
from tradehub.infrastructure.parsers import VolbrokerFixAeParser, build_parser_registry


class TestBuildParserRegistry:
    def test_builds_configured_parsers(self):
        settings = Settings(parser_order=["volbroker_fix_ae"], parser_initiator_id="HUB")

        registry = build_parser_registry(settings, InMemoryLookupRepository())

        assert registry.names == ["volbroker_fix_ae"]
        [parser] = list(registry)
        assert isinstance(parser, VolbrokerFixAeParser)
        assert registry.find_parser(make_message()) is parser

    def test_unknown_parser_name(self):
        settings = Settings(parser_order=["volbroker_fix_ae", "bloomberg_mail"])

        with pytest.raises(ValueError, match="bloomberg_mail"):
            build_parser_registry(settings, InMemoryLookupRepository())

    def test_empty_order_gives_empty_registry(self):
        registry = build_parser_registry(Settings(parser_order=[]), InMemoryLookupRepository())

        assert len(registry) == 0
        assert registry.find_parser(make_message()) is None
