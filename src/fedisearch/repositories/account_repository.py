# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fedisearch.models.account import Account
from fedisearch.repositories.base import BaseRepository, escape_like


class AccountRepository(BaseRepository[Account]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Account)

    async def search(self, query: str, limit: int = 20, offset: int = 0) -> list[Account]:
        """Match ``username`` by prefix or ``display_name`` by substring.

        ``@user@domain`` restricts matches to that domain; exact username
        matches sort first.
        """
        term = query.strip().removeprefix("@")
        username, _, domain = term.partition("@")
        if not username:
            return []

        pattern = escape_like(username.lower())
        exact = func.lower(Account.username) == username.lower()
        stmt = select(Account).where(
            Account.suspended.is_(False),
            or_(
                func.lower(Account.username).like(f"{pattern}%", escape="\\"),
                func.lower(Account.display_name).like(f"%{pattern}%", escape="\\"),
            ),
        )
        if domain:
            stmt = stmt.where(func.lower(Account.domain) == domain.lower())

        stmt = (
            stmt.order_by(case((exact, 0), else_=1), Account.username, Account.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_by_url(self, url: str) -> Account | None:
        result = await self.session.execute(
            select(Account)
            .where(or_(Account.url == url, Account.uri == url))
            .where(Account.suspended.is_(False))
            .limit(1)
        )
        return result.scalar_one_or_none()
