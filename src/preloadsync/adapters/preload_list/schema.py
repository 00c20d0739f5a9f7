"""Pydantic models describing the upstream preload list payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class PreloadListBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EntryPayload(PreloadListBaseModel):
    name: str
    mode: str | None = None
    include_subdomains: bool = False

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("entry name must not be blank")
        return value


class PreloadListPayload(PreloadListBaseModel):
    entries: list[EntryPayload]
