# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Per-category eligibility and the backend adapter interfaces.

The eligibility rules are shape heuristics kept exactly as clients expect
them: a leading ``#`` means "hashtag", a mention sigil without whitespace
means "a single handle", a mention sigil with whitespace is not a handle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from fedisearch.config import SearchPolicy
from fedisearch.search.request import (
    Identity,
    ResolvedResource,
    SearchCategory,
    SearchRequest,
)
from fedisearch.search.shaper import BackendQuery

HASHTAG_SIGIL = "#"
MENTION_SIGIL = "@"


class AccountSearch(Protocol):
    async def search(
        self,
        query: str,
        requester: Identity | None,
        *,
        limit: int,
        resolve: bool,
        offset: int,
    ) -> list[Any]: ...


class StatusSearch(Protocol):
    async def search(self, query: BackendQuery) -> Sequence[Any | None]:
        """Return matches in backend order; entries may be None."""
        ...


class TagSearch(Protocol):
    async def search(
        self,
        query: str,
        *,
        limit: int,
        offset: int,
        exclude_unreviewed: bool,
    ) -> list[Any]: ...


class URLResolver(Protocol):
    async def resolve(
        self, url: str, on_behalf_of: Identity | None
    ) -> ResolvedResource | None:
        """Raises ResolutionFailure when the URL cannot be fetched or classified."""
        ...


def _has_whitespace(text: str) -> bool:
    return any(ch.isspace() for ch in text)


def account_searchable(request: SearchRequest) -> bool:
    q = request.query
    return request.wants(SearchCategory.ACCOUNTS) and not (
        q.startswith(HASHTAG_SIGIL) or (MENTION_SIGIL in q and _has_whitespace(q))
    )


def full_text_searchable(request: SearchRequest, policy: SearchPolicy) -> bool:
    if not policy.full_text_enabled:
        return False
    q = request.query
    bare_handle = (q.startswith(HASHTAG_SIGIL) or MENTION_SIGIL in q) and not _has_whitespace(q)
    return (
        request.wants(SearchCategory.STATUSES)
        and request.requester is not None
        and not bare_handle
    )


def hashtag_searchable(request: SearchRequest) -> bool:
    return request.wants(SearchCategory.HASHTAGS) and MENTION_SIGIL not in request.query


def eligible_categories(request: SearchRequest, policy: SearchPolicy) -> list[SearchCategory]:
    categories = []
    if account_searchable(request):
        categories.append(SearchCategory.ACCOUNTS)
    if full_text_searchable(request, policy):
        categories.append(SearchCategory.STATUSES)
    if hashtag_searchable(request):
        categories.append(SearchCategory.HASHTAGS)
    return categories
