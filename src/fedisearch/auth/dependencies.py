# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fedisearch.auth.tokens import decode_access_token
from fedisearch.db.session import get_db
from fedisearch.models.account import Account

_bearer_scheme_optional = HTTPBearer(auto_error=False)


async def get_optional_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(
        _bearer_scheme_optional
    ),
    db: AsyncSession = Depends(get_db),
) -> Account | None:
    """Optionally authenticate. Returns None if no valid token is provided."""
    if credentials is None:
        return None

    try:
        account_id = decode_access_token(credentials.credentials)
    except (jwt.InvalidTokenError, ValueError):
        return None

    result = await db.execute(select(Account).where(Account.id == account_id))
    account = result.scalar_one_or_none()

    if account is None or account.suspended:
        return None

    return account
