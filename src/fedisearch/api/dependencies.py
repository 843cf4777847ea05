# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from fastapi import Request

from fedisearch.config import get_settings
from fedisearch.search.service import SearchService
from fedisearch.services.account_search import AccountSearchService
from fedisearch.services.fulltext import ElasticsearchStatusSearch
from fedisearch.services.relationships import SessionRelationshipLookup
from fedisearch.services.resolve_url import LocalURLResolver
from fedisearch.services.tag_search import TagSearchService


def get_search_service(request: Request) -> SearchService:
    """Wire the search router to the process-wide resources set up at startup."""
    state = request.app.state
    session_factory = state.session_factory
    return SearchService(
        accounts=AccountSearchService(session_factory),
        statuses=ElasticsearchStatusSearch(
            session_factory,
            client=state.http_client,
            settings=get_settings(),
        ),
        tags=TagSearchService(session_factory),
        resolver=LocalURLResolver(session_factory),
        relationships=SessionRelationshipLookup(session_factory),
        policy=state.search_policy,
    )
