"""Stored state of a single domain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .enums import PreloadStatus

if TYPE_CHECKING:
    from datetime import datetime

    from .primitives import DomainName


@dataclass(slots=True, frozen=True)
class DomainState:
    """State recorded for one domain.

    ``name`` is the store key. ``submission_date`` is only used internally (for the
    "already pending" message) and is never part of the JSON representation.
    """

    name: DomainName
    status: PreloadStatus
    # Usually explains a rejection.
    message: str | None = None
    submission_date: datetime | None = None

    @classmethod
    def unknown(cls, name: DomainName) -> DomainState:
        return cls(name=name, status=PreloadStatus.UNKNOWN)

    def to_json(self) -> dict[str, str]:
        payload = {"name": self.name, "status": str(self.status)}
        if self.message:
            payload["message"] = self.message
        return payload
