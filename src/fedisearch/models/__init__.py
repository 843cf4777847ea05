# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from fedisearch.models.account import Account
from fedisearch.models.base import Base, IDMixin, TimestampMixin
from fedisearch.models.relationship import AccountDomainBlock, Block, Follow, Mute
from fedisearch.models.status import Mention, Status, StatusVisibility
from fedisearch.models.tag import Tag

__all__ = [
    "Account",
    "AccountDomainBlock",
    "Base",
    "Block",
    "Follow",
    "IDMixin",
    "Mention",
    "Mute",
    "Status",
    "StatusVisibility",
    "Tag",
    "TimestampMixin",
]
