# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from fastapi import APIRouter

from fedisearch.api.search import router as search_router

v2_router = APIRouter()
v2_router.include_router(search_router)
