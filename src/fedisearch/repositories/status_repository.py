# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fedisearch.models.status import Status
from fedisearch.repositories.base import BaseRepository


class StatusRepository(BaseRepository[Status]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Status)

    async def get_many_ordered(self, status_ids: Sequence[int]) -> list[Status | None]:
        """Load statuses in the order given.

        Ids without a row (deleted since they were indexed) come back as
        ``None`` at their position.
        """
        if not status_ids:
            return []
        result = await self.session.execute(
            select(Status).where(Status.id.in_(set(status_ids)))
        )
        by_id = {s.id: s for s in result.scalars().all()}
        return [by_id.get(status_id) for status_id in status_ids]

    async def find_by_url(self, url: str) -> Status | None:
        result = await self.session.execute(
            select(Status).where(or_(Status.url == url, Status.uri == url)).limit(1)
        )
        return result.scalar_one_or_none()
