# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fedisearch.repositories.relationship_repository import RelationshipRepository
from fedisearch.search.visibility import RelationshipSnapshot


class SessionRelationshipLookup:
    """``RelationshipLookup`` reading all five maps in one session."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def snapshot(
        self,
        account_ids: Collection[int],
        domains: Collection[str],
        requester_id: int,
    ) -> RelationshipSnapshot:
        async with self._session_factory() as session:
            repo = RelationshipRepository(session)
            return RelationshipSnapshot(
                blocking=await repo.blocking_map(account_ids, requester_id),
                blocked_by=await repo.blocked_by_map(account_ids, requester_id),
                muting=await repo.muting_map(account_ids, requester_id),
                following=await repo.following_map(account_ids, requester_id),
                domain_blocking_by_domain=await repo.domain_blocking_map_by_domain(
                    domains, requester_id
                ),
            )
