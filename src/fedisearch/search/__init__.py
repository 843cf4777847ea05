# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from fedisearch.search.errors import (
    BackendUnavailable,
    GrammarParseFailure,
    ResolutionFailure,
    SearchError,
)
from fedisearch.search.request import (
    ResolvedResource,
    SearchCategory,
    SearchRequest,
    SearchResults,
)
from fedisearch.search.service import SearchService

__all__ = [
    "BackendUnavailable",
    "GrammarParseFailure",
    "ResolutionFailure",
    "ResolvedResource",
    "SearchCategory",
    "SearchError",
    "SearchRequest",
    "SearchResults",
    "SearchService",
]
