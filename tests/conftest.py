from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from preloadsync.adapters.sqlalchemy.migrations import upgrade_head
from preloadsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyDomainStateUnitOfWork,
    shutdown,
    startup,
)
from preloadsync.domain.store import DomainStateStore
from tests.helpers.store import InMemoryStateBackend, InMemoryUnitOfWorkFactory

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyDomainStateUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyDomainStateUnitOfWork:
        return SqlAlchemyDomainStateUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def backend() -> InMemoryStateBackend:
    return InMemoryStateBackend()


@pytest.fixture
def uow_factory(backend: InMemoryStateBackend) -> InMemoryUnitOfWorkFactory:
    return InMemoryUnitOfWorkFactory(backend)


@pytest.fixture
def store(uow_factory: InMemoryUnitOfWorkFactory) -> DomainStateStore:
    return DomainStateStore(uow_factory, chunk_size=2)
