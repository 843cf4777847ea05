# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations


class SearchError(Exception):
    """Base exception for search routing failures."""


class BackendUnavailable(SearchError):
    """Raised when the full-text backend cannot be reached or answers 5xx."""


class GrammarParseFailure(SearchError):
    """Raised when query text cannot be turned into a query tree."""


class ResolutionFailure(SearchError):
    """Raised when a URL cannot be fetched or classified into an entity."""
