# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_url: str
    log_level: str = "info"
    log_format: Literal["json", "text"] = "json"
    cors_origins: list[str] = []
    database_pool_size: int = 20

    # Auth
    jwt_secret_key: str
    access_token_expire_minutes: int = 1440

    # Full-text status index
    full_text_search_enabled: bool = True
    elasticsearch_url: str = "http://localhost:9200"
    elasticsearch_statuses_index: str = "statuses"
    elasticsearch_timeout: float = 5.0

    # When enabled, requesters on the allow-list (or everyone, if the list is
    # empty) search every visible status instead of only the ones marked
    # searchable by them.
    search_all_visible_statuses: bool = False
    # Example: "1,42,108" or "[1, 42, 108]"
    search_all_allowed_account_ids: Annotated[list[int], NoDecode] = []

    search_rate_limit: str = "300/5minutes"

    model_config = {"env_file": ".env", "frozen": True}

    @field_validator("search_all_allowed_account_ids", mode="before")
    @classmethod
    def _parse_account_ids(cls, value: Any) -> list[int]:
        if value is None or value == "":
            return []
        if isinstance(value, str):
            raw = value.strip().strip("[]")
            items: list[Any] = raw.split(",")
        else:
            items = list(value)
        ids = []
        for item in items:
            try:
                ids.append(int(str(item).strip()))
            except ValueError:
                # Non-numeric entries can never match an account id.
                continue
        return ids

    @model_validator(mode="after")
    def _validate_jwt_secret(self) -> "Settings":
        if len(self.jwt_secret_key) < 32:
            raise ValueError("jwt_secret_key must be at least 32 characters")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance. Lazy-loaded to avoid import-time failures."""
    return Settings()


@dataclass(frozen=True, slots=True)
class SearchPolicy:
    """Deployment-wide search switches, fixed for the process lifetime."""

    search_all_visible: bool = False
    allowed_account_ids: frozenset[int] = frozenset()
    full_text_enabled: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchPolicy:
        return cls(
            search_all_visible=settings.search_all_visible_statuses,
            allowed_account_ids=frozenset(settings.search_all_allowed_account_ids),
            full_text_enabled=settings.full_text_search_enabled,
        )

    def can_search_all(self, account_id: int) -> bool:
        """An empty allow-list admits every account."""
        if not self.allowed_account_ids:
            return True
        return account_id in self.allowed_account_ids

    def restricts_to_searchable(self, account_id: int) -> bool:
        return not (self.search_all_visible and self.can_search_all(account_id))
