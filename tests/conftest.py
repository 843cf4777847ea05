# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from itertools import count

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-chars")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from fedisearch.models.base import Base  # noqa: E402

_ids = count(1000)


def _get_test_database_url() -> str:
    """Return the test database URL from env, falling back to SQLite for unit tests."""
    return os.environ.get(
        "TEST_DATABASE_URL",
        "sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
async def async_engine() -> AsyncIterator[AsyncEngine]:
    """Create an async engine for the test database."""
    url = _get_test_database_url()
    if url.startswith("sqlite"):
        # Every session must see the same in-memory database.
        engine = create_async_engine(url, echo=False, poolclass=StaticPool)
    else:
        engine = create_async_engine(url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Provide a session for arranging rows; callers commit what adapters must see."""
    async with session_factory() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------------------------
# Factory helpers for creating model instances in tests
# ---------------------------------------------------------------------------


def make_account(
    *,
    username: str = "alice",
    domain: str | None = None,
    display_name: str = "",
    url: str | None = None,
    suspended: bool = False,
) -> dict[str, object]:
    """Return kwargs suitable for constructing an Account model instance."""
    return {
        "id": next(_ids),
        "username": username,
        "domain": domain,
        "display_name": display_name,
        "url": url,
        "uri": url,
        "discoverable": True,
        "suspended": suspended,
    }


def make_status(
    *,
    account_id: int,
    text: str = "Test status",
    visibility: str = "public",
    url: str | None = None,
    created_at: datetime | None = None,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Status model instance."""
    return {
        "id": next(_ids),
        "account_id": account_id,
        "text": text,
        "visibility": visibility,
        "url": url,
        "uri": url,
        "created_at": created_at or datetime.now(timezone.utc),
    }


def make_tag(
    *,
    name: str = "python",
    listable: bool = True,
    reviewed: bool = True,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a Tag model instance."""
    return {
        "id": next(_ids),
        "name": name,
        "display_name": name,
        "listable": listable,
        "reviewed_at": datetime.now(timezone.utc) if reviewed else None,
    }
