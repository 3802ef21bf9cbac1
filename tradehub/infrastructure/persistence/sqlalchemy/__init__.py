"""SQLAlchemy persistence adapter."""

from .database import create_engine_from_settings, create_session_factory
from .unit_of_work import SQLAlchemyUnitOfWork, create_unit_of_work

__all__ = [
    "SQLAlchemyUnitOfWork",
    "create_unit_of_work",
    "create_engine_from_settings",
    "create_session_factory",
]
