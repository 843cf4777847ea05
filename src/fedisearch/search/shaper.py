# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Build the full-text backend query for a classified search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from fedisearch.config import SearchPolicy
from fedisearch.search.grammar import CONTENT_FIELD, QueryParser
from fedisearch.search.query_mode import (
    BooleanQuery,
    QueryMode,
    RankedPhraseQuery,
    SortOrder,
    StructuredGrammarQuery,
)
from fedisearch.search.request import SearchRequest


@dataclass(frozen=True, slots=True)
class BackendQuery:
    query: dict[str, Any]
    filters: tuple[dict[str, Any], ...] = ()
    sort_by_date: SortOrder | None = None
    limit: int = 20
    offset: int = 0

    def to_body(self) -> dict[str, Any]:
        """Render an Elasticsearch ``_search`` request body.

        Without a date sort the backend's relevance order is kept.
        """
        body: dict[str, Any] = {
            "query": {"bool": {"must": [self.query], "filter": list(self.filters)}},
            "size": self.limit,
            "from": self.offset,
            "_source": False,
        }
        if self.sort_by_date is not None:
            body["sort"] = [{"created_at": {"order": self.sort_by_date.value}}]
        return body


def _content_query(mode: QueryMode, parser: QueryParser) -> tuple[dict[str, Any], SortOrder | None]:
    if isinstance(mode, RankedPhraseQuery):
        return {
            "simple_query_string": {
                "query": mode.text,
                "fields": [CONTENT_FIELD],
                "default_operator": "AND",
            }
        }, mode.sort_by_date
    if isinstance(mode, BooleanQuery):
        return {
            "query_string": {
                "query": mode.text,
                "default_field": CONTENT_FIELD,
                "default_operator": "AND",
            }
        }, mode.sort_by_date
    if isinstance(mode, StructuredGrammarQuery):
        return parser.parse(mode.text).to_query(), SortOrder.DESC
    raise ValueError(f"{type(mode).__name__} has no full-text query")


def shape(
    mode: QueryMode,
    request: SearchRequest,
    policy: SearchPolicy,
    parser: QueryParser,
) -> BackendQuery:
    """Raises GrammarParseFailure for unparseable structured queries."""
    query, sort = _content_query(mode, parser)

    filters: list[dict[str, Any]] = []
    if request.requester is not None and policy.restricts_to_searchable(request.requester.id):
        filters.append({"term": {"searchable_by": request.requester.id}})

    if request.author_filter is not None:
        filters.append({"term": {"account_id": request.author_filter}})

    if request.min_id is not None or request.max_id is not None:
        bounds: dict[str, int] = {}
        if request.min_id is not None:
            bounds["gt"] = request.min_id
        if request.max_id is not None:
            bounds["lt"] = request.max_id
        filters.append({"range": {"id": bounds}})

    return BackendQuery(
        query=query,
        filters=tuple(filters),
        sort_by_date=sort,
        limit=request.limit,
        offset=request.offset,
    )
