"""SQLAlchemy-backed unit of work for domain states."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from preloadsync.adapters.sqlalchemy.errors import store_errors
from preloadsync.adapters.sqlalchemy.migrations import upgrade_head
from preloadsync.adapters.sqlalchemy.repositories import SqlAlchemyDomainStateRepository
from preloadsync.config import get_database_config
from preloadsync.domain.ports.unit_of_work import DomainStateRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

    from preloadsync.config import DatabaseConfig

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call preloadsync.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def create_store_engine(config: DatabaseConfig) -> Engine:
    """Create an engine whose connects and lock waits are bounded by the store timeout."""

    url = make_url(config.uri)
    options: dict[str, Any] = {"future": True}
    match url.get_backend_name():
        case "sqlite":
            options["connect_args"] = {"timeout": config.timeout_seconds}
        case "postgresql":
            timeout_ms = int(config.timeout_seconds * 1000)
            options["connect_args"] = {
                "connect_timeout": max(1, int(config.timeout_seconds)),
                "options": f"-c statement_timeout={timeout_ms} -c lock_timeout={timeout_ms}",
            }
            options["pool_timeout"] = config.timeout_seconds
        case _:
            options["pool_timeout"] = config.timeout_seconds
    return create_engine(url, **options)


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, schema, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        config = get_database_config()
        if database_uri is not None:
            config = replace(config, uri=database_uri)
        engine = create_store_engine(config)
    upgrade_head(engine=engine)
    log.debug("Domain state store ready on %s", engine.url.render_as_string(hide_password=True))

    _STATE.engine = engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


class SqlAlchemyDomainStateUnitOfWork:
    """Unit of work managing one SQLAlchemy session over the domain state table."""

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None
        self._repositories: DomainStateRepositories | None = None

    def __enter__(self) -> SqlAlchemyDomainStateUnitOfWork:
        self.session = self.session_factory()
        self._repositories = DomainStateRepositories(
            domain_states=SqlAlchemyDomainStateRepository(self.session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self.session = None
        self._repositories = None
        return False

    def commit(self) -> None:
        with store_errors("committing domain states"):
            self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> DomainStateRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


if TYPE_CHECKING:
    from preloadsync.domain.ports.unit_of_work import DomainStateUnitOfWork

    _uow_check: DomainStateUnitOfWork = SqlAlchemyDomainStateUnitOfWork()
