"""Port for the external preload policy checks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from preloadsync.domain.model import DomainName, Issues


@runtime_checkable
class EligibilityCheck(Protocol):
    """Evaluate a candidate domain; an empty ``errors`` tuple means it passed."""

    def __call__(self, domain: DomainName) -> Issues: ...


__all__ = ["EligibilityCheck"]
