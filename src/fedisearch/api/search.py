# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from fedisearch.api.dependencies import get_search_service
from fedisearch.auth.dependencies import get_optional_account
from fedisearch.config import get_settings
from fedisearch.models.account import Account
from fedisearch.schemas.search import (
    AccountResponse,
    SearchResponse,
    StatusResponse,
    TagResponse,
)
from fedisearch.search.service import SearchService

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/search", tags=["search"])


@router.get("", response_model=SearchResponse)
@limiter.limit(lambda: get_settings().search_rate_limit)
async def search(
    request: Request,
    q: str = Query(...),
    type: Literal["accounts", "statuses", "hashtags"] | None = Query(None),
    resolve: bool = Query(False),
    account_id: int | None = Query(None),
    min_id: int | None = Query(None),
    max_id: int | None = Query(None),
    exclude_unreviewed: bool = Query(False),
    limit: int = Query(20, ge=1, le=40),
    offset: int = Query(0, ge=0),
    account: Account | None = Depends(get_optional_account),
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    if account is None and (resolve or offset > 0):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Search queries that resolve remote resources or page results "
            "require an authenticated account",
            headers={"WWW-Authenticate": "Bearer"},
        )

    results = await service.call(
        q,
        account,
        limit,
        type=type,
        offset=offset,
        resolve=resolve,
        account_id=account_id,
        min_id=min_id,
        max_id=max_id,
        exclude_unreviewed=exclude_unreviewed,
    )
    return SearchResponse(
        accounts=[AccountResponse.model_validate(a) for a in results.accounts],
        statuses=[StatusResponse.model_validate(s) for s in results.statuses],
        hashtags=[TagResponse.model_validate(t) for t in results.hashtags],
    )
