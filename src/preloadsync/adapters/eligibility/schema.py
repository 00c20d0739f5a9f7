"""Pydantic models for the eligibility checker API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class CheckerBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class IssuePayload(CheckerBaseModel):
    code: str
    summary: str = ""
    message: str = ""


class IssuesPayload(CheckerBaseModel):
    errors: list[IssuePayload]
    warnings: list[IssuePayload]

    # The API serialises empty lists as null.
    @field_validator("errors", "warnings", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return [] if value is None else value
