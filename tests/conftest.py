# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read at import time; pin the values tests depend on
os.environ["API_PREFIX"] = "/api"
os.environ["LOG_TO_FILE"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"

from collections.abc import AsyncGenerator  # noqa: E402
from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from app.models import AuthorDB, CategoryDB  # noqa: E402


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """File-backed SQLite engine with the full schema."""
    db_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    async with db_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def seeded_refs(
    session_maker: async_sessionmaker[AsyncSession],
) -> tuple[list[AuthorDB], list[CategoryDB]]:
    """Two authors and three categories, committed."""
    authors = [
        AuthorDB(uid="jdoe", name="Jane Doe"),
        AuthorDB(uid="rsmith", name="Rob Smith"),
    ]
    categories = [
        CategoryDB(slug="python", name="Python"),
        CategoryDB(slug="golang", name="Go"),
        CategoryDB(slug="databases", name="Databases"),
    ]
    async with session_maker() as session:
        session.add_all([*authors, *categories])
        await session.commit()
    return authors, categories
