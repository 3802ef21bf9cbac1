"""Base Query class for the CQRS split.

Query - a request to read data. Queries have no side effects.
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class Query(ABC):
    """Base class for all queries.

    Example:
        >>> @dataclass(frozen=True)
        ... class GetTradeSystemSummariesQuery(Query):
        ...     system_code: SystemCode | None = None

        >>> summaries = await handler.handle(GetTradeSystemSummariesQuery())
    """

    pass
