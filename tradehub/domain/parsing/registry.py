"""ParserRegistry - ordered, first-match-wins dispatch over parsers."""

import logging
from typing import Iterable, Iterator

from tradehub.domain.messages.entities import InboundMessage
from tradehub.domain.shared import DomainException

from .parser import InboundMessageParser

logger = logging.getLogger(__name__)


class ParserContractError(DomainException):
    """A parser's can_parse raised instead of answering.

    This is a bug in the parser, not a property of the message, so it is not
    recorded as a parse failure.
    """

    pass


class ParserRegistry:
    """Immutable, explicitly ordered collection of parsers.

    Registration order is significant: the first parser whose ``can_parse``
    returns True handles the message. No best-match scoring is attempted.

    Example:
        >>> registry = ParserRegistry([VolbrokerFixAeParser(lookups), MailParser()])
        >>> parser = registry.find_parser(message)
        >>> if parser is None:
        ...     print("No parser available")
    """

    def __init__(self, parsers: Iterable[InboundMessageParser] = ()) -> None:
        self._parsers: tuple[InboundMessageParser, ...] = tuple(parsers)

    def find_parser(self, message: InboundMessage) -> InboundMessageParser | None:
        """Return the first parser claiming the message, or None.

        Raises:
            ParserContractError: If a parser's can_parse raises.
        """
        for parser in self._parsers:
            try:
                claimed = parser.can_parse(message)
            except Exception as e:
                raise ParserContractError(
                    f"{parser!r}.can_parse raised {type(e).__name__}: {e}",
                    message_in_id=message.id,
                ) from e

            if claimed:
                logger.debug(
                    "parser_registry.parser_selected",
                    extra={"message_in_id": message.id, "parser": parser.name},
                )
                return parser

        return None

    @property
    def names(self) -> list[str]:
        return [parser.name for parser in self._parsers]

    def __iter__(self) -> Iterator[InboundMessageParser]:
        return iter(self._parsers)

    def __len__(self) -> int:
        return len(self._parsers)

    def __repr__(self) -> str:
        return f"ParserRegistry({self.names})"
