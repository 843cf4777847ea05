# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Elasticsearch status index adapter.

This is the only module that talks to Elasticsearch. The router hands it a
shaped ``BackendQuery``; it returns statuses loaded from the database in the
order the index ranked them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fedisearch.config import Settings, get_settings
from fedisearch.models.status import Status
from fedisearch.repositories.status_repository import StatusRepository
from fedisearch.search.errors import BackendUnavailable, GrammarParseFailure, SearchError
from fedisearch.search.shaper import BackendQuery

logger = logging.getLogger(__name__)


class ElasticsearchStatusSearch:
    """``StatusSearch`` implementation backed by an Elasticsearch index.

    Parameters
    ----------
    session_factory:
        Opens the session used to load matching statuses.
    client:
        Shared HTTP client. When omitted the adapter owns one and closes it
        in :meth:`close`.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._session_factory = session_factory
        self._base_url = settings.elasticsearch_url.rstrip("/")
        self._index = settings.elasticsearch_statuses_index
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.elasticsearch_timeout),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
        )

    async def search(self, query: BackendQuery) -> Sequence[Status | None]:
        status_ids = await self.search_ids(query)
        if not status_ids:
            return []
        async with self._session_factory() as session:
            return await StatusRepository(session).get_many_ordered(status_ids)

    async def search_ids(self, query: BackendQuery) -> list[int]:
        url = f"{self._base_url}/{self._index}/_search"
        try:
            resp = await self._client.post(url, json=query.to_body())
        except httpx.ConnectError as exc:
            raise BackendUnavailable(f"Cannot connect to Elasticsearch at {self._base_url}") from exc
        except httpx.TimeoutException as exc:
            raise BackendUnavailable(f"Elasticsearch request timed out: {url}") from exc
        except httpx.TransportError as exc:
            raise BackendUnavailable(f"Elasticsearch transport error: {exc}") from exc

        if resp.status_code >= 500:
            raise BackendUnavailable(f"Elasticsearch returned {resp.status_code}")
        if resp.status_code == 400:
            # query_string syntax errors in user input surface as 400s.
            raise GrammarParseFailure(f"Elasticsearch rejected the query: {resp.text[:200]}")
        if resp.status_code >= 400:
            detail = resp.text[:500] if resp.text else str(resp.status_code)
            raise SearchError(f"Elasticsearch error {resp.status_code}: {detail}")

        hits = resp.json().get("hits", {}).get("hits", [])
        ids = []
        for hit in hits:
            try:
                ids.append(int(hit["_id"]))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping index hit without a numeric id: %r", hit)
        return ids

    async def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()
