# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from sqlalchemy import Boolean, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fedisearch.models.base import Base, IDMixin, TimestampMixin


class Account(IDMixin, TimestampMixin, Base):
    __tablename__ = "accounts"

    username: Mapped[str] = mapped_column(String(255), nullable=False)
    # NULL for local accounts.
    domain: Mapped[str | None] = mapped_column(String(255), default=None)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    url: Mapped[str | None] = mapped_column(Text, default=None)
    uri: Mapped[str | None] = mapped_column(Text, default=None)
    discoverable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    suspended: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("username", "domain"),
        Index("idx_accounts_url", "url"),
        Index("idx_accounts_uri", "uri"),
    )

    @property
    def local(self) -> bool:
        return self.domain is None

    @property
    def acct(self) -> str:
        if self.domain is None:
            return self.username
        return f"{self.username}@{self.domain}"
