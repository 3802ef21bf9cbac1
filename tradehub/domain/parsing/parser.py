"""InboundMessageParser Port - capability contract of every source format.

Concrete variants (FIX, mail, file import) live in infrastructure and are
registered in a fixed order in the ParserRegistry.
"""

from abc import ABC, abstractmethod

from tradehub.domain.messages.entities import InboundMessage

from .parse_result import ParseResult


class InboundMessageParser(ABC):
    """Abstract parser for one inbound message format.

    Rules:
    - ``can_parse`` is a pure predicate: no I/O, no state changes, and it
      returns False (never raises) for messages of another format
    - ``parse`` may read reference data but never writes trades; all
      persistence goes through the orchestrator

    Example:
        >>> class MailConfirmationParser(InboundMessageParser):
        ...     name = "mail_confirmation"
        ...
        ...     def can_parse(self, message):
        ...         return message.source_type == "MAIL"
        ...
        ...     async def parse(self, message):
        ...         return ParseResult.failed("Unsupported mail layout.")
    """

    #: Registry name, used in configuration and logs.
    name: str = ""

    @abstractmethod
    def can_parse(self, message: InboundMessage) -> bool:
        """Check whether this parser understands the message's shape."""
        pass

    @abstractmethod
    async def parse(self, message: InboundMessage) -> ParseResult:
        """Convert a message into zero-or-more trade bundles or a failure."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
