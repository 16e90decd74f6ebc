"""Shared fixtures: a throwaway SQLite catalog per test."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import create_engine, event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import storefront.catalog.models  # noqa: F401
from storefront.catalog.managers import CategoryManager, MarkManager, ProductManager
from storefront.infrastructure.database import Base


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """Create an empty catalog schema in a temporary SQLite file."""
    path = tmp_path / "catalog.db"
    sync_engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def session_factory(database_url: str) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the temporary database.

    NullPool keeps connections from leaking between event loops.
    """
    engine = create_async_engine(database_url, poolclass=NullPool)
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the temporary database."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def products(session: AsyncSession) -> ProductManager:
    """Product manager."""
    return ProductManager(session)


@pytest.fixture
def categories(session: AsyncSession) -> CategoryManager:
    """Category manager."""
    return CategoryManager(session)


@pytest.fixture
def marks(session: AsyncSession) -> MarkManager:
    """Mark manager."""
    return MarkManager(session)
