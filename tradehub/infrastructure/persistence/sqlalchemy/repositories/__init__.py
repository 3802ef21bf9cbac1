"""SQLAlchemy repository implementations."""

from .message_in_repository import SQLAlchemyMessageInRepository
from .stp_lookup_repository import SQLAlchemyStpLookupRepository
from .stp_repository import SQLAlchemyStpRepository

__all__ = [
    "SQLAlchemyMessageInRepository",
    "SQLAlchemyStpRepository",
    "SQLAlchemyStpLookupRepository",
]
