# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Federated search router.

Classifies a query, fans out to the eligible category backends, filters
status results for the requester and assembles the three-category response.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from fedisearch.config import SearchPolicy
from fedisearch.search.dispatcher import (
    AccountSearch,
    StatusSearch,
    TagSearch,
    URLResolver,
    eligible_categories,
)
from fedisearch.search.errors import (
    BackendUnavailable,
    GrammarParseFailure,
    ResolutionFailure,
)
from fedisearch.search.grammar import QueryParser, SimpleQueryParser
from fedisearch.search.query_mode import QueryMode, RemoteResourceResolution, classify
from fedisearch.search.request import (
    Identity,
    SearchCategory,
    SearchRequest,
    SearchResults,
)
from fedisearch.search.shaper import shape
from fedisearch.search.visibility import (
    RelationshipLookup,
    VisibilityPredicate,
    filter_statuses,
    status_visible,
)

logger = logging.getLogger(__name__)


async def _fan_out(
    jobs: dict[SearchCategory, Coroutine[Any, Any, list[Any]]],
) -> dict[SearchCategory, list[Any]]:
    """Run category searches concurrently; any failure cancels the rest."""
    tasks = {
        category: asyncio.create_task(job, name=f"search-{category.value}")
        for category, job in jobs.items()
    }
    try:
        await asyncio.gather(*tasks.values())
    except BaseException:
        for task in tasks.values():
            task.cancel()
        await asyncio.gather(*tasks.values(), return_exceptions=True)
        raise
    return {category: task.result() for category, task in tasks.items()}


class SearchService:
    def __init__(
        self,
        *,
        accounts: AccountSearch,
        statuses: StatusSearch,
        tags: TagSearch,
        resolver: URLResolver,
        relationships: RelationshipLookup,
        policy: SearchPolicy,
        parser: QueryParser | None = None,
        visibility: VisibilityPredicate = status_visible,
    ) -> None:
        self._accounts = accounts
        self._statuses = statuses
        self._tags = tags
        self._resolver = resolver
        self._relationships = relationships
        self._policy = policy
        self._parser = parser or SimpleQueryParser()
        self._visibility = visibility

    async def call(
        self,
        query: str | None,
        requester: Identity | None,
        limit: int,
        **options: Any,
    ) -> SearchResults:
        """Search every eligible category.

        ``options`` accepts ``type``, ``offset``, ``resolve``, ``account_id``,
        ``min_id``, ``max_id`` and ``exclude_unreviewed``.
        """
        return await self.search(SearchRequest.build(query, requester, limit, **options))

    async def search(self, request: SearchRequest) -> SearchResults:
        results = SearchResults()
        if request.is_blank:
            return results

        mode = classify(request.query, resolve=request.resolve)
        if isinstance(mode, RemoteResourceResolution):
            return await self._resolve_url(mode, request)

        categories = eligible_categories(request, self._policy)
        logger.debug(
            "Search mode %s dispatching %s",
            type(mode).__name__,
            [c.value for c in categories],
        )

        jobs: dict[SearchCategory, Coroutine[Any, Any, list[Any]]] = {}
        for category in categories:
            if category is SearchCategory.ACCOUNTS:
                jobs[category] = self._search_accounts(request)
            elif category is SearchCategory.HASHTAGS:
                jobs[category] = self._search_hashtags(request)
            elif request.requester is not None:
                jobs[category] = self._search_statuses(request, mode, request.requester)

        found = await _fan_out(jobs)
        results.accounts = found.get(SearchCategory.ACCOUNTS, [])
        results.statuses = found.get(SearchCategory.STATUSES, [])
        results.hashtags = found.get(SearchCategory.HASHTAGS, [])
        return results

    async def _resolve_url(
        self, mode: RemoteResourceResolution, request: SearchRequest
    ) -> SearchResults:
        results = SearchResults()
        if request.offset > 0:
            return results

        try:
            resource = await self._resolver.resolve(mode.url, on_behalf_of=request.requester)
        except ResolutionFailure as exc:
            logger.info("URL search could not resolve its target: %s", exc)
            return results

        if resource is None:
            return results
        if request.type_filter is not None and resource.category is not request.type_filter:
            return results

        setattr(results, resource.category.value, [resource.entity])
        return results

    async def _search_accounts(self, request: SearchRequest) -> list[Any]:
        return list(
            await self._accounts.search(
                request.query,
                request.requester,
                limit=request.limit,
                resolve=request.resolve,
                offset=request.offset,
            )
        )

    async def _search_statuses(
        self, request: SearchRequest, mode: QueryMode, requester: Identity
    ) -> list[Any]:
        try:
            backend_query = shape(mode, request, self._policy, self._parser)
            raw = await self._statuses.search(backend_query)
        except (BackendUnavailable, GrammarParseFailure) as exc:
            logger.warning("Status search returned no results: %s", exc)
            return []

        return await filter_statuses(
            raw, requester, self._relationships, self._visibility
        )

    async def _search_hashtags(self, request: SearchRequest) -> list[Any]:
        return list(
            await self._tags.search(
                request.query,
                limit=request.limit,
                offset=request.offset,
                exclude_unreviewed=request.exclude_unreviewed,
            )
        )
