# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Requester-relative filtering of status results."""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from fedisearch.models.status import StatusVisibility
from fedisearch.search.request import Identity

_EMPTY: Mapping[Any, bool] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class RelationshipSnapshot:
    """Relations between one requester and a set of authors/domains.

    Built once per request; missing keys read as ``False``.
    """

    blocking: Mapping[int, bool] = field(default=_EMPTY)
    blocked_by: Mapping[int, bool] = field(default=_EMPTY)
    muting: Mapping[int, bool] = field(default=_EMPTY)
    following: Mapping[int, bool] = field(default=_EMPTY)
    domain_blocking_by_domain: Mapping[str, bool] = field(default=_EMPTY)

    def is_blocking(self, account_id: int) -> bool:
        return self.blocking.get(account_id, False)

    def is_blocked_by(self, account_id: int) -> bool:
        return self.blocked_by.get(account_id, False)

    def is_muting(self, account_id: int) -> bool:
        return self.muting.get(account_id, False)

    def is_following(self, account_id: int) -> bool:
        return self.following.get(account_id, False)

    def is_domain_blocking(self, domain: str | None) -> bool:
        if domain is None:
            return False
        return self.domain_blocking_by_domain.get(domain, False)


class RelationshipLookup(Protocol):
    async def snapshot(
        self,
        account_ids: Collection[int],
        domains: Collection[str],
        requester_id: int,
    ) -> RelationshipSnapshot: ...


type VisibilityPredicate = Callable[[Any, Identity, RelationshipSnapshot], bool]


def status_visible(status: Any, requester: Identity, snapshot: RelationshipSnapshot) -> bool:
    """Default visibility rules for a status in search results."""
    author_id = status.account_id
    if author_id == requester.id:
        return True

    if (
        snapshot.is_blocking(author_id)
        or snapshot.is_blocked_by(author_id)
        or snapshot.is_muting(author_id)
    ):
        return False

    if snapshot.is_domain_blocking(status.account_domain) and not snapshot.is_following(author_id):
        return False

    visibility = status.visibility
    if visibility in (StatusVisibility.PUBLIC.value, StatusVisibility.UNLISTED.value):
        return True
    if visibility == StatusVisibility.PRIVATE.value:
        return snapshot.is_following(author_id)
    if visibility == StatusVisibility.DIRECT.value:
        return requester.id in status.mentioned_account_ids
    return False


async def filter_statuses(
    statuses: Sequence[Any | None],
    requester: Identity,
    lookup: RelationshipLookup,
    predicate: VisibilityPredicate = status_visible,
) -> list[Any]:
    """Drop missing entries and statuses the requester must not see.

    Relative order is preserved. Relations are fetched once for the whole
    batch, never per status.
    """
    present = [s for s in statuses if s is not None]
    if not present:
        return []

    account_ids = list(dict.fromkeys(s.account_id for s in present))
    domains = list(dict.fromkeys(s.account_domain for s in present if s.account_domain))
    snapshot = await lookup.snapshot(account_ids, domains, requester.id)

    return [s for s in present if predicate(s, requester, snapshot)]
