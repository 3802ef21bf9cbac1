"""Trading repository ports."""

from .stp_lookup_repository import StpLookupRepository
from .stp_repository import StpRepository

__all__ = ["StpRepository", "StpLookupRepository"]
