# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fedisearch.config import SearchPolicy, Settings
from fedisearch.models.account import Account
from fedisearch.models.relationship import AccountDomainBlock, Block
from fedisearch.models.status import Mention, Status
from fedisearch.models.tag import Tag
from fedisearch.search.errors import ResolutionFailure
from fedisearch.search.request import SearchCategory
from fedisearch.search.service import SearchService
from fedisearch.services.account_search import AccountSearchService
from fedisearch.services.fulltext import ElasticsearchStatusSearch
from fedisearch.services.relationships import SessionRelationshipLookup
from fedisearch.services.resolve_url import LocalURLResolver
from fedisearch.services.tag_search import TagSearchService
from tests.conftest import make_account, make_status, make_tag


@pytest.fixture
async def world(db_session: AsyncSession) -> dict[str, object]:
    """Committed rows shared by the adapter tests."""
    me = Account(**make_account(username="me"))
    friend = Account(**make_account(username="friend", url="https://local.example/@friend"))
    troll = Account(**make_account(username="troll"))
    remote = Account(**make_account(username="far", domain="bad.example"))
    db_session.add_all([me, friend, troll, remote])
    await db_session.flush()

    public = Status(**make_status(account_id=friend.id, text="fox", url="https://local.example/@friend/1"))
    private = Status(
        **make_status(account_id=friend.id, text="secret fox", visibility="private", url="https://local.example/@friend/2")
    )
    trolling = Status(**make_status(account_id=troll.id, text="fox troll"))
    far = Status(**make_status(account_id=remote.id, text="far fox"))
    mine = Status(**make_status(account_id=me.id, text="my fox", visibility="direct"))
    db_session.add_all([public, private, trolling, far, mine])
    await db_session.flush()

    db_session.add_all(
        [
            Mention(status_id=mine.id, account_id=friend.id),
            Block(account_id=me.id, target_account_id=troll.id),
            AccountDomainBlock(account_id=me.id, domain="bad.example"),
            Tag(**make_tag(name="foxes")),
        ]
    )
    await db_session.commit()
    return {
        "me": me,
        "friend": friend,
        "troll": troll,
        "remote": remote,
        "public": public,
        "private": private,
        "trolling": trolling,
        "far": far,
        "mine": mine,
    }


class TestAccountAndTagServices:
    async def test_account_search(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        found = await AccountSearchService(session_factory).search(
            "fri", None, limit=10, resolve=True, offset=0
        )
        assert [a.username for a in found] == ["friend"]

    async def test_tag_search(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        found = await TagSearchService(session_factory).search("#fox", limit=10)
        assert [t.name for t in found] == ["foxes"]


class TestSessionRelationshipLookup:
    async def test_snapshot(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        me, troll, friend = world["me"], world["troll"], world["friend"]
        snapshot = await SessionRelationshipLookup(session_factory).snapshot(
            [troll.id, friend.id], ["bad.example"], me.id
        )
        assert snapshot.is_blocking(troll.id)
        assert not snapshot.is_blocking(friend.id)
        assert snapshot.is_domain_blocking("bad.example")


class TestLocalURLResolver:
    async def test_public_status(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        resource = await LocalURLResolver(session_factory).resolve(
            "https://local.example/@friend/1", on_behalf_of=world["me"]
        )
        assert resource is not None
        assert resource.category is SearchCategory.STATUSES
        assert resource.entity.id == world["public"].id

    async def test_private_status_hidden_from_others(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        resolver = LocalURLResolver(session_factory)
        url = "https://local.example/@friend/2"
        assert await resolver.resolve(url, on_behalf_of=world["me"]) is None
        owned = await resolver.resolve(url, on_behalf_of=world["friend"])
        assert owned is not None and owned.category is SearchCategory.STATUSES

    async def test_account(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        resource = await LocalURLResolver(session_factory).resolve("https://local.example/@friend")
        assert resource is not None
        assert resource.category is SearchCategory.ACCOUNTS

    async def test_tag_page(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        resource = await LocalURLResolver(session_factory).resolve("https://local.example/tags/Foxes")
        assert resource is not None
        assert resource.category is SearchCategory.HASHTAGS
        assert resource.entity.name == "foxes"

    async def test_unknown_url(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        assert await LocalURLResolver(session_factory).resolve("https://elsewhere.example/x") is None

    async def test_malformed_url(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        with pytest.raises(ResolutionFailure):
            await LocalURLResolver(session_factory).resolve("https://")


class TestEndToEnd:
    async def test_status_results_filtered_for_requester(
        self, session_factory: async_sessionmaker[AsyncSession], world: dict[str, object]
    ) -> None:
        ranked = [world[name].id for name in ("trolling", "public", "private", "far", "mine")]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"hits": {"hits": [{"_id": str(i)} for i in ranked]}})

        settings = Settings(database_url="sqlite+aiosqlite://", jwt_secret_key="x" * 32)
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        service = SearchService(
            accounts=AccountSearchService(session_factory),
            statuses=ElasticsearchStatusSearch(session_factory, client=client, settings=settings),
            tags=TagSearchService(session_factory),
            resolver=LocalURLResolver(session_factory),
            relationships=SessionRelationshipLookup(session_factory),
            policy=SearchPolicy(),
        )

        # A mention with whitespace only dispatches the status category.
        results = await service.call("@friend fox", world["me"], 20)

        assert [s.text for s in results.statuses] == ["fox", "my fox"]
        assert results.hashtags == []
        assert results.accounts == []
        await client.aclose()
