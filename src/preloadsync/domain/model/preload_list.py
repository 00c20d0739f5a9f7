"""Snapshot of the upstream preload list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .enums import PreloadMode

if TYPE_CHECKING:
    from .primitives import DomainName


@dataclass(slots=True, frozen=True)
class PreloadEntry:
    name: DomainName
    mode: str | None = None
    include_subdomains: bool = False

    @classmethod
    def pending(cls, name: DomainName) -> PreloadEntry:
        """Entry as a pending submission is proposed for the list."""

        return cls(name=name, mode=PreloadMode.FORCE_HTTPS, include_subdomains=True)

    @property
    def enforced(self) -> bool:
        return self.mode == PreloadMode.FORCE_HTTPS

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "include_subdomains": self.include_subdomains,
        }
        if self.mode is not None:
            payload["mode"] = str(self.mode)
        return payload


@dataclass(slots=True, frozen=True)
class PreloadList:
    entries: tuple[PreloadEntry, ...] = ()

    def enforced_names(self) -> list[DomainName]:
        """Names of enforced entries, first occurrence order, without repeats."""

        return list(dict.fromkeys(entry.name for entry in self.entries if entry.enforced))
