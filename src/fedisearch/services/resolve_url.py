# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Resolve a pasted URL to a locally stored status, account or tag."""

from __future__ import annotations

import logging
import re
from urllib.parse import unquote, urlsplit

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fedisearch.models.status import Status, StatusVisibility
from fedisearch.repositories.account_repository import AccountRepository
from fedisearch.repositories.status_repository import StatusRepository
from fedisearch.repositories.tag_repository import TagRepository
from fedisearch.search.errors import ResolutionFailure
from fedisearch.search.request import Identity, ResolvedResource, SearchCategory

logger = logging.getLogger(__name__)

_TAG_PATH_RE = re.compile(r"/tags/([^/]+)/?\Z")

_PUBLICLY_VISIBLE = {StatusVisibility.PUBLIC.value, StatusVisibility.UNLISTED.value}


def _readable(status: Status, on_behalf_of: Identity | None) -> bool:
    if status.visibility in _PUBLICLY_VISIBLE:
        return True
    return on_behalf_of is not None and status.account_id == on_behalf_of.id


class LocalURLResolver:
    """``URLResolver`` over rows already in the database.

    Lookup order is status, account, then tag page. Remote documents are
    never fetched.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def resolve(
        self, url: str, on_behalf_of: Identity | None = None
    ) -> ResolvedResource | None:
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ResolutionFailure(f"Not an absolute http(s) URL: {url!r}")

        async with self._session_factory() as session:
            status = await StatusRepository(session).find_by_url(url)
            if status is not None:
                if _readable(status, on_behalf_of):
                    return ResolvedResource(SearchCategory.STATUSES, status)
                logger.debug("Resolved status %s is not readable by requester", status.id)
                return None

            account = await AccountRepository(session).find_by_url(url)
            if account is not None:
                return ResolvedResource(SearchCategory.ACCOUNTS, account)

            match = _TAG_PATH_RE.search(parts.path)
            if match is not None:
                tag = await TagRepository(session).find_by_name(unquote(match.group(1)))
                if tag is not None:
                    return ResolvedResource(SearchCategory.HASHTAGS, tag)

        return None
