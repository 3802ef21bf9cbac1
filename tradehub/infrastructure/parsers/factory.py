"""Parser factory - builds the ordered ParserRegistry from configuration."""

import logging
from typing import Callable

from tradehub.config import Settings
from tradehub.domain.parsing import InboundMessageParser, ParserRegistry
from tradehub.domain.trading.repositories import StpLookupRepository

from .volbroker_fix_ae import VolbrokerFixAeParser

logger = logging.getLogger(__name__)

ParserBuilder = Callable[[StpLookupRepository, Settings], InboundMessageParser]

PARSER_BUILDERS: dict[str, ParserBuilder] = {
    VolbrokerFixAeParser.name: lambda lookups, settings: VolbrokerFixAeParser(
        lookups, initiator_id=settings.parser_initiator_id
    ),
}


def build_parser_registry(
    settings: Settings,
    lookup_repository: StpLookupRepository,
) -> ParserRegistry:
    """Instantiate the parsers named in ``settings.parser_order``, in that order.

    Args:
        settings: Application settings.
        lookup_repository: Reference data shared by all parsers.

    Returns:
        ParserRegistry with first-match-wins ordering.

    Raises:
        ValueError: If a configured parser name is unknown.
    """
    unknown = [name for name in settings.parser_order if name not in PARSER_BUILDERS]
    if unknown:
        raise ValueError(
            f"Unknown parser(s) in parser_order: {unknown}. "
            f"Available: {sorted(PARSER_BUILDERS)}"
        )

    registry = ParserRegistry(
        PARSER_BUILDERS[name](lookup_repository, settings) for name in settings.parser_order
    )

    logger.info("parser_registry.built", extra={"parsers": registry.names})
    return registry
