"""SQLAlchemy adapter package for preloadsync."""

from __future__ import annotations

from .mappings import domain_state_table, metadata
from .repositories import SqlAlchemyDomainStateRepository
from .unit_of_work import (
    SqlAlchemyDomainStateUnitOfWork,
    StartupError,
    create_store_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyDomainStateRepository",
    "SqlAlchemyDomainStateUnitOfWork",
    "StartupError",
    "create_store_engine",
    "domain_state_table",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
