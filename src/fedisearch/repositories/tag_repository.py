# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fedisearch.models.tag import Tag
from fedisearch.repositories.base import BaseRepository, escape_like


def normalize_tag_name(value: str) -> str:
    return value.strip().removeprefix("#").lower()


class TagRepository(BaseRepository[Tag]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Tag)

    async def search(
        self,
        query: str,
        limit: int = 20,
        offset: int = 0,
        exclude_unreviewed: bool = False,
    ) -> list[Tag]:
        name = normalize_tag_name(query)
        if not name:
            return []

        pattern = escape_like(name)
        stmt = select(Tag).where(
            Tag.listable.is_(True),
            Tag.name.like(f"{pattern}%", escape="\\"),
        )
        if exclude_unreviewed:
            stmt = stmt.where(Tag.reviewed_at.is_not(None))

        stmt = stmt.order_by(Tag.name).limit(limit).offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_name(self, name: str) -> Tag | None:
        result = await self.session.execute(
            select(Tag).where(Tag.name == normalize_tag_name(name))
        )
        return result.scalar_one_or_none()
