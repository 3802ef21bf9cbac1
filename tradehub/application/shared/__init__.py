"""Shared Application Layer components."""

from .command import Command
from .handler import CommandHandler, QueryHandler
from .query import Query
from .unit_of_work import UnitOfWork

__all__ = [
    "Command",
    "Query",
    "CommandHandler",
    "QueryHandler",
    "UnitOfWork",
]
