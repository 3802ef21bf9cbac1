"""Concrete inbound message parsers."""

from .factory import PARSER_BUILDERS, build_parser_registry
from .volbroker_fix_ae import VolbrokerFixAeParser, map_call_put_to_base

__all__ = [
    "VolbrokerFixAeParser",
    "map_call_put_to_base",
    "build_parser_registry",
    "PARSER_BUILDERS",
]
