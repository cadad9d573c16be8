"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from versionable import (
    Base,
    clear_versioning_context,
    remove_versioning_listeners,
    setup_versioning_listeners,
)
from versionable.config import settings

# Import test models to ensure they're registered with Base.metadata
from tests.models import Article, Comment, Tag  # noqa: F401


@pytest.fixture(autouse=True)
def versioning_listeners() -> Generator[None, None, None]:
    """Install the versioning listeners around each test."""
    setup_versioning_listeners()
    yield
    remove_versioning_listeners()


@pytest.fixture(autouse=True)
def reset_versioning_context() -> Generator[None, None, None]:
    """Start and end every test in console mode."""
    clear_versioning_context()
    yield
    clear_versioning_context()


@pytest.fixture(autouse=True)
def versioning_enabled(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure versioning is on unless a test turns it off."""
    monkeypatch.setattr(settings, "enabled", True)


# ============================================================
# Synchronous database
# ============================================================


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Provide a database session for tests."""
    session_factory = sessionmaker(bind=engine)

    with session_factory() as session:
        yield session


# ============================================================
# Async database
# ============================================================


@pytest.fixture
async def async_engine():
    """Create an in-memory aiosqlite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def async_session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the test engine."""
    return async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db(async_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session for tests."""
    async with async_session_factory() as session:
        yield session
