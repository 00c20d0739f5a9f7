"""Domain port definitions for adapters."""

from __future__ import annotations

from .eligibility import EligibilityCheck
from .fetching import PreloadListFetcher
from .persistence import DomainStateRepository
from .unit_of_work import (
    DomainStateRepositories,
    DomainStateUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "DomainStateRepositories",
    "DomainStateRepository",
    "DomainStateUnitOfWork",
    "EligibilityCheck",
    "PreloadListFetcher",
    "RepositoryCollection",
    "UnitOfWork",
]
