# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from fedisearch.repositories.account_repository import AccountRepository
from fedisearch.repositories.base import BaseRepository
from fedisearch.repositories.relationship_repository import RelationshipRepository
from fedisearch.repositories.status_repository import StatusRepository
from fedisearch.repositories.tag_repository import TagRepository

__all__ = [
    "AccountRepository",
    "BaseRepository",
    "RelationshipRepository",
    "StatusRepository",
    "TagRepository",
]
