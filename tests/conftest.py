"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for the accessor cache, resolvers and
an in-memory SQLite database.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from paginator.constants import SortFieldPolicy
from paginator.pagination.accessors import AccessorCache, accessor_cache
from paginator.pagination.resolver import SortKeyResolver


@pytest.fixture(autouse=True)
def clear_accessor_cache():
    """Start every test with an empty process-wide accessor cache."""
    accessor_cache.clear()
    yield
    accessor_cache.clear()


@pytest.fixture
def cache():
    """Provides an isolated AccessorCache."""
    return AccessorCache()


@pytest.fixture
def strict_resolver(cache):
    """Provides a strict resolver backed by an isolated cache."""
    return SortKeyResolver(SortFieldPolicy.STRICT, cache=cache)


@pytest.fixture
def fallback_resolver(cache):
    """Provides a fallback resolver backed by an isolated cache."""
    return SortKeyResolver(
        SortFieldPolicy.FALLBACK,
        fallback_fields=("id", "date_created"),
        cache=cache,
    )


@pytest_asyncio.fixture
async def db_session():
    """
    Provides an AsyncSession on a fresh in-memory SQLite database.

    Yields:
        AsyncSession: Session with all SQLModel tables created
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

    await engine.dispose()
