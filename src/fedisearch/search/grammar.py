# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Structured query grammar.

The router only depends on the ``QueryParser`` protocol. ``SimpleQueryParser``
is the default grammar::

    fox "quick brown" -lazy +dog language:en
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Protocol

from fedisearch.search.errors import GrammarParseFailure

CONTENT_FIELD = "text"

_TOKEN_RE = re.compile(r'([+-]?)(?:"([^"]*)"|([^\s"]+))')
_LANGUAGE_KEYS = {"language", "lang"}


@dataclass(slots=True)
class QueryTree:
    """Backend-neutral boolean tree of content clauses."""

    must: list[dict[str, Any]] = field(default_factory=list)
    must_not: list[dict[str, Any]] = field(default_factory=list)
    filter: list[dict[str, Any]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.must or self.must_not or self.filter)

    def to_query(self) -> dict[str, Any]:
        clause: dict[str, Any] = {}
        if self.must:
            clause["must"] = list(self.must)
        if self.must_not:
            clause["must_not"] = list(self.must_not)
        if self.filter:
            clause["filter"] = list(self.filter)
        return {"bool": clause}


class QueryParser(Protocol):
    def parse(self, text: str) -> QueryTree:
        """Parse grammar text. Raises GrammarParseFailure."""
        ...


class SimpleQueryParser:
    """Terms, quoted phrases, ``+``/``-`` operators and a language filter."""

    def parse(self, text: str) -> QueryTree:
        tree = QueryTree()
        pos = 0
        length = len(text)

        while pos < length:
            if text[pos].isspace():
                pos += 1
                continue
            match = _TOKEN_RE.match(text, pos)
            if match is None:
                raise GrammarParseFailure(f"unterminated phrase at offset {pos}")
            pos = match.end()
            if pos < length and not text[pos].isspace():
                raise GrammarParseFailure(f"unexpected character at offset {pos}")

            operator, phrase, term = match.groups()
            if phrase is not None:
                if not phrase.strip():
                    raise GrammarParseFailure("empty phrase")
                clause = {"match_phrase": {CONTENT_FIELD: phrase}}
            elif term.strip("+-") == "":
                raise GrammarParseFailure(f"dangling operator {term!r}")
            else:
                key, sep, value = term.partition(":")
                if sep and key.lower() in _LANGUAGE_KEYS and value:
                    if operator == "-":
                        tree.must_not.append({"term": {"language": value.lower()}})
                    else:
                        tree.filter.append({"term": {"language": value.lower()}})
                    continue
                clause = {"match": {CONTENT_FIELD: {"query": term, "operator": "and"}}}

            if operator == "-":
                tree.must_not.append(clause)
            else:
                tree.must.append(clause)

        if tree.is_empty():
            raise GrammarParseFailure("query has no searchable terms")
        return tree
