# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from fedisearch.models.account import Account
from fedisearch.models.relationship import AccountDomainBlock, Block, Follow, Mute
from fedisearch.models.status import Status
from fedisearch.models.tag import Tag
from fedisearch.repositories.account_repository import AccountRepository
from fedisearch.repositories.relationship_repository import RelationshipRepository
from fedisearch.repositories.status_repository import StatusRepository
from fedisearch.repositories.tag_repository import TagRepository
from tests.conftest import make_account, make_status, make_tag


async def _accounts(db_session: AsyncSession, *specs: dict[str, object]) -> list[Account]:
    accounts = [Account(**spec) for spec in specs]
    db_session.add_all(accounts)
    await db_session.flush()
    return accounts


class TestAccountRepositorySearch:
    async def test_prefix_and_display_name_matches(self, db_session: AsyncSession) -> None:
        await _accounts(
            db_session,
            make_account(username="alicia"),
            make_account(username="alice"),
            make_account(username="bob", display_name="Friend of Alice"),
            make_account(username="carol"),
        )
        found = await AccountRepository(db_session).search("ali")
        assert [a.username for a in found] == ["alice", "alicia", "bob"]

    async def test_exact_match_first(self, db_session: AsyncSession) -> None:
        await _accounts(
            db_session,
            make_account(username="ann"),
            make_account(username="anna"),
            make_account(username="an"),
        )
        found = await AccountRepository(db_session).search("@an")
        assert found[0].username == "an"

    async def test_domain_restriction(self, db_session: AsyncSession) -> None:
        await _accounts(
            db_session,
            make_account(username="alice"),
            make_account(username="alice", domain="remote.example"),
        )
        found = await AccountRepository(db_session).search("@alice@Remote.Example")
        assert [a.acct for a in found] == ["alice@remote.example"]

    async def test_suspended_excluded(self, db_session: AsyncSession) -> None:
        await _accounts(db_session, make_account(username="alice", suspended=True))
        assert await AccountRepository(db_session).search("alice") == []

    async def test_like_wildcards_are_literal(self, db_session: AsyncSession) -> None:
        await _accounts(db_session, make_account(username="alice"))
        assert await AccountRepository(db_session).search("%") == []

    async def test_limit_and_offset(self, db_session: AsyncSession) -> None:
        await _accounts(db_session, *(make_account(username=f"user{i}") for i in range(5)))
        found = await AccountRepository(db_session).search("user", limit=2, offset=2)
        assert [a.username for a in found] == ["user2", "user3"]

    async def test_find_by_url(self, db_session: AsyncSession) -> None:
        (alice,) = await _accounts(
            db_session, make_account(username="alice", url="https://local.example/@alice")
        )
        repo = AccountRepository(db_session)
        assert await repo.find_by_url("https://local.example/@alice") is alice
        assert await repo.find_by_url("https://local.example/@bob") is None


class TestStatusRepository:
    async def test_get_many_ordered(self, db_session: AsyncSession) -> None:
        (author,) = await _accounts(db_session, make_account())
        statuses = [Status(**make_status(account_id=author.id, text=f"s{i}")) for i in range(3)]
        db_session.add_all(statuses)
        await db_session.flush()

        ids = [statuses[2].id, -1, statuses[0].id]
        found = await StatusRepository(db_session).get_many_ordered(ids)
        assert [s.text if s else None for s in found] == ["s2", None, "s0"]

    async def test_get_many_ordered_empty(self, db_session: AsyncSession) -> None:
        assert await StatusRepository(db_session).get_many_ordered([]) == []

    async def test_author_domain(self, db_session: AsyncSession) -> None:
        (author,) = await _accounts(db_session, make_account(domain="remote.example"))
        status = Status(**make_status(account_id=author.id))
        db_session.add(status)
        await db_session.flush()
        db_session.expunge_all()

        (loaded,) = await StatusRepository(db_session).get_many_ordered([status.id])
        assert loaded is not None
        assert loaded.account_domain == "remote.example"


class TestTagRepository:
    async def test_search_prefix_strips_sigil(self, db_session: AsyncSession) -> None:
        db_session.add_all(
            [
                Tag(**make_tag(name="python")),
                Tag(**make_tag(name="pythonista")),
                Tag(**make_tag(name="rust")),
            ]
        )
        await db_session.flush()
        found = await TagRepository(db_session).search("#Pyth")
        assert [t.name for t in found] == ["python", "pythonista"]

    async def test_unlisted_and_unreviewed(self, db_session: AsyncSession) -> None:
        db_session.add_all(
            [
                Tag(**make_tag(name="fox", listable=False)),
                Tag(**make_tag(name="foxes", reviewed=False)),
                Tag(**make_tag(name="foxglove")),
            ]
        )
        await db_session.flush()
        repo = TagRepository(db_session)
        assert [t.name for t in await repo.search("fox")] == ["foxes", "foxglove"]
        assert [t.name for t in await repo.search("fox", exclude_unreviewed=True)] == ["foxglove"]

    async def test_blank_query(self, db_session: AsyncSession) -> None:
        assert await TagRepository(db_session).search("#") == []


class TestRelationshipRepository:
    async def test_maps(self, db_session: AsyncSession) -> None:
        me, blocked, blocker, muted, followed = await _accounts(
            db_session,
            make_account(username="me"),
            make_account(username="blocked"),
            make_account(username="blocker"),
            make_account(username="muted"),
            make_account(username="followed"),
        )
        db_session.add_all(
            [
                Block(account_id=me.id, target_account_id=blocked.id),
                Block(account_id=blocker.id, target_account_id=me.id),
                Mute(account_id=me.id, target_account_id=muted.id),
                Follow(account_id=me.id, target_account_id=followed.id),
                Follow(account_id=followed.id, target_account_id=me.id),
                AccountDomainBlock(account_id=me.id, domain="bad.example"),
            ]
        )
        await db_session.flush()

        repo = RelationshipRepository(db_session)
        others = [blocked.id, blocker.id, muted.id, followed.id]
        assert await repo.blocking_map(others, me.id) == {blocked.id: True}
        assert await repo.blocked_by_map(others, me.id) == {blocker.id: True}
        assert await repo.muting_map(others, me.id) == {muted.id: True}
        assert await repo.following_map(others, me.id) == {followed.id: True}
        assert await repo.domain_blocking_map_by_domain(
            ["bad.example", "good.example"], me.id
        ) == {"bad.example": True}

    async def test_empty_inputs_skip_queries(self, db_session: AsyncSession) -> None:
        repo = RelationshipRepository(db_session)
        assert await repo.blocking_map([], 1) == {}
        assert await repo.domain_blocking_map_by_domain([], 1) == {}
