# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Query mode selection from the leading sigils of a search query.

A query may start with a mode sigil, optionally followed by a sort sigil::

    🔍 [📈|📉] text   ranked phrase matching (simple query string)
    🔎 [📈|📉] text   boolean token matching (query-language pass-through)
    text             structured grammar

The prefix is consumed by a small state machine: mode sigil, then sort
sigil, trimming whitespace after each step. Both sigils are optional
independently, but a sort sigil is only recognised after a mode sigil.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

RANKED_PHRASE_SIGIL = "\U0001f50d"  # 🔍
BOOLEAN_SIGIL = "\U0001f50e"  # 🔎
SORT_ASC_SIGIL = "\U0001f4c8"  # 📈
SORT_DESC_SIGIL = "\U0001f4c9"  # 📉

_URL_RE = re.compile(r"\Ahttps?://")


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class RemoteResourceResolution:
    url: str


@dataclass(frozen=True, slots=True)
class RankedPhraseQuery:
    text: str
    sort_by_date: SortOrder | None = None


@dataclass(frozen=True, slots=True)
class BooleanQuery:
    text: str
    sort_by_date: SortOrder | None = None


@dataclass(frozen=True, slots=True)
class StructuredGrammarQuery:
    # Parsed lazily by the shaper so a parse failure only costs the
    # status category.
    text: str


type QueryMode = (
    RemoteResourceResolution | RankedPhraseQuery | BooleanQuery | StructuredGrammarQuery
)

_MODE_SIGILS: dict[str, type[RankedPhraseQuery] | type[BooleanQuery]] = {
    RANKED_PHRASE_SIGIL: RankedPhraseQuery,
    BOOLEAN_SIGIL: BooleanQuery,
}

_SORT_SIGILS = {
    SORT_ASC_SIGIL: SortOrder.ASC,
    SORT_DESC_SIGIL: SortOrder.DESC,
}


class _State(enum.Enum):
    MODE = enum.auto()
    SORT = enum.auto()
    DONE = enum.auto()


def _consume[V](text: str, sigils: dict[str, V]) -> tuple[V | None, str]:
    for sigil, value in sigils.items():
        if text.startswith(sigil):
            return value, text.removeprefix(sigil).strip()
    return None, text


def is_url_query(query: str) -> bool:
    return _URL_RE.match(query) is not None


def classify(query: str, *, resolve: bool = False) -> QueryMode:
    """Select the query mode for an already-trimmed query."""
    if resolve and is_url_query(query):
        return RemoteResourceResolution(url=query)

    mode: type[RankedPhraseQuery] | type[BooleanQuery] | None = None
    sort: SortOrder | None = None
    rest = query
    state = _State.MODE

    while state is not _State.DONE:
        if state is _State.MODE:
            mode, rest = _consume(rest, _MODE_SIGILS)
            if mode is None:
                return StructuredGrammarQuery(text=query)
            state = _State.SORT
        else:
            sort, rest = _consume(rest, _SORT_SIGILS)
            state = _State.DONE

    return mode(text=rest, sort_by_date=sort)
