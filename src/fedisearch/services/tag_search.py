# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fedisearch.models.tag import Tag
from fedisearch.repositories.tag_repository import TagRepository


class TagSearchService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def search(
        self,
        query: str,
        *,
        limit: int,
        offset: int = 0,
        exclude_unreviewed: bool = False,
    ) -> list[Tag]:
        async with self._session_factory() as session:
            return await TagRepository(session).search(
                query,
                limit=limit,
                offset=offset,
                exclude_unreviewed=exclude_unreviewed,
            )
