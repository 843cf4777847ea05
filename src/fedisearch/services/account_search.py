# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fedisearch.models.account import Account
from fedisearch.repositories.account_repository import AccountRepository
from fedisearch.search.request import Identity


class AccountSearchService:
    """Identity lookup over locally known accounts.

    ``resolve`` is accepted for interface compatibility; remote handles are
    not fetched, so only accounts already stored are returned.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def search(
        self,
        query: str,
        requester: Identity | None,
        *,
        limit: int,
        resolve: bool = False,
        offset: int = 0,
    ) -> list[Account]:
        async with self._session_factory() as session:
            return await AccountRepository(session).search(query, limit=limit, offset=offset)
