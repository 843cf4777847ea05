# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

import enum

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fedisearch.models.account import Account
from fedisearch.models.base import Base, BigIntID, IDMixin, TimestampMixin


class StatusVisibility(str, enum.Enum):
    PUBLIC = "public"
    UNLISTED = "unlisted"
    PRIVATE = "private"
    DIRECT = "direct"


class Status(IDMixin, TimestampMixin, Base):
    __tablename__ = "statuses"

    account_id: Mapped[int] = mapped_column(
        BigIntID,
        ForeignKey("accounts.id"),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    visibility: Mapped[str] = mapped_column(
        String,
        nullable=False,
        default=StatusVisibility.PUBLIC.value,
    )
    url: Mapped[str | None] = mapped_column(Text, default=None)
    uri: Mapped[str | None] = mapped_column(Text, default=None)

    account: Mapped[Account] = relationship(lazy="selectin")
    mentions: Mapped[list[Mention]] = relationship(
        lazy="selectin",
        back_populates="status",
    )

    __table_args__ = (
        CheckConstraint(
            "visibility IN ('public', 'unlisted', 'private', 'direct')",
            name="ck_statuses_visibility",
        ),
        Index("idx_statuses_account", "account_id"),
        Index("idx_statuses_url", "url"),
        Index("idx_statuses_uri", "uri"),
    )

    @property
    def account_domain(self) -> str | None:
        return self.account.domain if self.account is not None else None

    @property
    def mentioned_account_ids(self) -> set[int]:
        return {m.account_id for m in self.mentions}


class Mention(IDMixin, Base):
    __tablename__ = "mentions"

    status_id: Mapped[int] = mapped_column(
        BigIntID,
        ForeignKey("statuses.id"),
        nullable=False,
    )
    account_id: Mapped[int] = mapped_column(
        BigIntID,
        ForeignKey("accounts.id"),
        nullable=False,
    )

    status: Mapped[Status] = relationship(back_populates="mentions")

    __table_args__ = (Index("idx_mentions_status", "status_id"),)
