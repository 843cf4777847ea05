# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fedisearch.models.relationship import AccountDomainBlock, Block, Follow, Mute


class RelationshipRepository:
    """Bulk relationship lookups relative to one account.

    Every map only contains keys for which the relation holds; absent keys
    mean ``False``.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def blocking_map(
        self, target_account_ids: Collection[int], account_id: int
    ) -> dict[int, bool]:
        """Accounts among ``target_account_ids`` that ``account_id`` blocks."""
        if not target_account_ids:
            return {}
        result = await self.session.execute(
            select(Block.target_account_id).where(
                Block.account_id == account_id,
                Block.target_account_id.in_(target_account_ids),
            )
        )
        return {target_id: True for target_id in result.scalars().all()}

    async def blocked_by_map(
        self, target_account_ids: Collection[int], account_id: int
    ) -> dict[int, bool]:
        """Accounts among ``target_account_ids`` that block ``account_id``."""
        if not target_account_ids:
            return {}
        result = await self.session.execute(
            select(Block.account_id).where(
                Block.target_account_id == account_id,
                Block.account_id.in_(target_account_ids),
            )
        )
        return {source_id: True for source_id in result.scalars().all()}

    async def muting_map(
        self, target_account_ids: Collection[int], account_id: int
    ) -> dict[int, bool]:
        if not target_account_ids:
            return {}
        result = await self.session.execute(
            select(Mute.target_account_id).where(
                Mute.account_id == account_id,
                Mute.target_account_id.in_(target_account_ids),
            )
        )
        return {target_id: True for target_id in result.scalars().all()}

    async def following_map(
        self, target_account_ids: Collection[int], account_id: int
    ) -> dict[int, bool]:
        if not target_account_ids:
            return {}
        result = await self.session.execute(
            select(Follow.target_account_id).where(
                Follow.account_id == account_id,
                Follow.target_account_id.in_(target_account_ids),
            )
        )
        return {target_id: True for target_id in result.scalars().all()}

    async def domain_blocking_map_by_domain(
        self, domains: Collection[str], account_id: int
    ) -> dict[str, bool]:
        if not domains:
            return {}
        result = await self.session.execute(
            select(AccountDomainBlock.domain).where(
                AccountDomainBlock.account_id == account_id,
                AccountDomainBlock.domain.in_(domains),
            )
        )
        return {domain: True for domain in result.scalars().all()}
