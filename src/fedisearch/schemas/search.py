# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Fedisearch Contributors

from __future__ import annotations

from datetime import datetime

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    model_validator,
)


class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    acct: str
    display_name: str
    url: str | None = None
    created_at: datetime | None = None

    @field_serializer("id")
    def _serialize_id(self, value: int) -> str:
        return str(value)


class StatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    # Named ``content`` on the wire, ``text`` on the model.
    content: str = Field(validation_alias=AliasChoices("text", "content"))
    visibility: str
    url: str | None = None
    uri: str | None = None
    created_at: datetime | None = None
    account: AccountResponse

    @field_serializer("id")
    def _serialize_id(self, value: int) -> str:
        return str(value)


class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    display_name: str | None = None

    @model_validator(mode="after")
    def _default_display_name(self) -> TagResponse:
        if self.display_name is None:
            self.display_name = self.name
        return self


class SearchResponse(BaseModel):
    accounts: list[AccountResponse] = []
    statuses: list[StatusResponse] = []
    hashtags: list[TagResponse] = []
