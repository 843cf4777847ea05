# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from fedisearch.models.base import Base, IDMixin, TimestampMixin


class Tag(IDMixin, TimestampMixin, Base):
    __tablename__ = "tags"

    # Always stored lowercase; display_name keeps the author's casing.
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String(255), default=None)
    listable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    @property
    def reviewed(self) -> bool:
        return self.reviewed_at is not None
