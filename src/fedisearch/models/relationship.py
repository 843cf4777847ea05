# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

"""Account-to-account and account-to-domain relationship rows.

Each row reads "``account_id`` <verb> ``target_account_id``".
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from fedisearch.models.base import Base, BigIntID, IDMixin, TimestampMixin


class _AccountPairMixin:
    account_id: Mapped[int] = mapped_column(
        BigIntID,
        ForeignKey("accounts.id"),
        nullable=False,
    )
    target_account_id: Mapped[int] = mapped_column(
        BigIntID,
        ForeignKey("accounts.id"),
        nullable=False,
    )


class Block(_AccountPairMixin, IDMixin, TimestampMixin, Base):
    __tablename__ = "blocks"

    __table_args__ = (
        UniqueConstraint("account_id", "target_account_id"),
        Index("idx_blocks_target", "target_account_id"),
    )


class Mute(_AccountPairMixin, IDMixin, TimestampMixin, Base):
    __tablename__ = "mutes"

    __table_args__ = (UniqueConstraint("account_id", "target_account_id"),)


class Follow(_AccountPairMixin, IDMixin, TimestampMixin, Base):
    __tablename__ = "follows"

    __table_args__ = (
        UniqueConstraint("account_id", "target_account_id"),
        Index("idx_follows_target", "target_account_id"),
    )


class AccountDomainBlock(IDMixin, TimestampMixin, Base):
    __tablename__ = "account_domain_blocks"

    account_id: Mapped[int] = mapped_column(
        BigIntID,
        ForeignKey("accounts.id"),
        nullable=False,
    )
    domain: Mapped[str] = mapped_column(String(255), nullable=False)

    __table_args__ = (UniqueConstraint("account_id", "domain"),)
