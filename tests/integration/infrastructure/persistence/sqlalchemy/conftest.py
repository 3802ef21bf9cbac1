"""Pytest fixtures for SQLAlchemy integration tests."""

import pytest


@pytest.fixture
async def session(session_factory):
    """Async session, rolled back after each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()
