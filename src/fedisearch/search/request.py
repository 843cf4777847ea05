# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Protocol


class SearchCategory(str, enum.Enum):
    ACCOUNTS = "accounts"
    STATUSES = "statuses"
    HASHTAGS = "hashtags"


class Identity(Protocol):
    @property
    def id(self) -> int: ...


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """One normalized search invocation.

    Build instances with :meth:`build`, which trims the query and disables
    pagination for mixed-category searches.
    """

    query: str
    requester: Identity | None
    limit: int
    offset: int = 0
    type_filter: SearchCategory | None = None
    resolve: bool = False
    author_filter: int | None = None
    min_id: int | None = None
    max_id: int | None = None
    exclude_unreviewed: bool = False

    @classmethod
    def build(
        cls,
        query: str | None,
        requester: Identity | None,
        limit: int,
        *,
        type: SearchCategory | str | None = None,
        offset: int | None = 0,
        resolve: bool = False,
        account_id: int | None = None,
        min_id: int | None = None,
        max_id: int | None = None,
        exclude_unreviewed: bool = False,
    ) -> SearchRequest:
        type_filter = SearchCategory(type) if type else None
        return cls(
            query=(query or "").strip(),
            requester=requester,
            limit=max(int(limit), 0),
            # Paging across mixed categories is undefined.
            offset=max(int(offset or 0), 0) if type_filter is not None else 0,
            type_filter=type_filter,
            resolve=bool(resolve),
            author_filter=account_id,
            min_id=min_id,
            max_id=max_id,
            exclude_unreviewed=bool(exclude_unreviewed),
        )

    @property
    def is_blank(self) -> bool:
        return not self.query or self.limit == 0

    def wants(self, category: SearchCategory) -> bool:
        return self.type_filter is None or self.type_filter is category


@dataclass(frozen=True, slots=True)
class ResolvedResource:
    """An entity a URL resolved to, tagged with the category it belongs in."""

    category: SearchCategory
    entity: Any


@dataclass(slots=True)
class SearchResults:
    accounts: list[Any] = field(default_factory=list)
    statuses: list[Any] = field(default_factory=list)
    hashtags: list[Any] = field(default_factory=list)

    def as_dict(self) -> dict[str, list[Any]]:
        return {
            SearchCategory.ACCOUNTS.value: self.accounts,
            SearchCategory.STATUSES.value: self.statuses,
            SearchCategory.HASHTAGS.value: self.hashtags,
        }
