from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import insert, select

from preloadsync.adapters.sqlalchemy import domain_state_table
from preloadsync.domain.errors import StoreError, UnknownStatusError
from preloadsync.domain.model import DomainState, PreloadStatus
from preloadsync.domain.store import PENDING_WRITE_BLOCKED, DomainStateStore

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine

    from preloadsync.adapters.sqlalchemy import SqlAlchemyDomainStateUnitOfWork

    UowFactory = Callable[[], SqlAlchemyDomainStateUnitOfWork]


def test_upsert_many_inserts_and_updates(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.domain_states.upsert_many(
            [
                DomainState(name="a.com", status=PreloadStatus.PENDING),
                DomainState(name="b.com", status=PreloadStatus.PRELOADED),
            ]
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        uow.repositories.domain_states.upsert_many(
            [DomainState(name="a.com", status=PreloadStatus.REJECTED, message="Too short.")]
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        states = uow.repositories.domain_states.all()

    assert states == [
        DomainState(name="a.com", status=PreloadStatus.REJECTED, message="Too short."),
        DomainState(name="b.com", status=PreloadStatus.PRELOADED),
    ]


def test_uncommitted_writes_are_discarded(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.domain_states.upsert_many(
            [DomainState(name="a.com", status=PreloadStatus.PENDING)]
        )

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.domain_states.get("a.com") is None


def test_get_round_trips_submission_date(sqlite_unit_of_work: UowFactory) -> None:
    submitted = datetime(2024, 2, 29, 23, 59, tzinfo=UTC)
    with sqlite_unit_of_work() as uow:
        uow.repositories.domain_states.upsert_many(
            [DomainState(name="a.com", status=PreloadStatus.PENDING, submission_date=submitted)]
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        state = uow.repositories.domain_states.get("a.com")

    assert state is not None
    assert state.submission_date == submitted


def test_names_with_status_are_sorted(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.domain_states.upsert_many(
            [
                DomainState(name="c.com", status=PreloadStatus.PRELOADED),
                DomainState(name="a.com", status=PreloadStatus.PRELOADED),
                DomainState(name="b.com", status=PreloadStatus.PENDING),
            ]
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        names = uow.repositories.domain_states.names_with_status(PreloadStatus.PRELOADED)

    assert names == ["a.com", "c.com"]


@pytest.mark.parametrize(
    ("existing", "written"),
    [
        (None, True),
        (PreloadStatus.REJECTED, True),
        (PreloadStatus.REMOVED, True),
        (PreloadStatus.PENDING, False),
        (PreloadStatus.PRELOADED, False),
        (PreloadStatus.PENDING_REMOVAL, False),
    ],
)
def test_put_unless_status(
    sqlite_unit_of_work: UowFactory,
    existing: PreloadStatus | None,
    written: bool,  # noqa: FBT001
) -> None:
    if existing is not None:
        with sqlite_unit_of_work() as uow:
            uow.repositories.domain_states.upsert_many(
                [DomainState(name="a.com", status=existing)]
            )
            uow.commit()

    pending = DomainState(
        name="a.com",
        status=PreloadStatus.PENDING,
        submission_date=datetime(2024, 1, 1, tzinfo=UTC),
    )
    with sqlite_unit_of_work() as uow:
        result = uow.repositories.domain_states.put_unless_status(
            pending,
            blocked=PENDING_WRITE_BLOCKED,
        )
        uow.commit()

    with sqlite_unit_of_work() as uow:
        stored = uow.repositories.domain_states.get("a.com")

    assert result is written
    assert stored is not None
    assert stored.status is (PreloadStatus.PENDING if written else existing)


def test_unrecognised_stored_status_is_refused(
    sqlite_engine: Engine,
    sqlite_unit_of_work: UowFactory,
) -> None:
    with sqlite_engine.begin() as connection:
        connection.exec_driver_sql(
            "INSERT INTO domain_state (name, status) VALUES ('a.com', 'preloaded-ish')"
        )

    with sqlite_unit_of_work() as uow, pytest.raises(UnknownStatusError) as excinfo:
        uow.repositories.domain_states.get("a.com")

    assert excinfo.value.value == "preloaded-ish"


def test_unknown_status_cannot_be_bound(sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow, pytest.raises(StoreError):
        uow.repositories.domain_states.upsert_many([DomainState.unknown("a.com")])


def test_status_is_stored_as_text(sqlite_engine: Engine, sqlite_unit_of_work: UowFactory) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.domain_states.upsert_many(
            [DomainState(name="a.com", status=PreloadStatus.PENDING_REMOVAL)]
        )
        uow.commit()

    with sqlite_engine.connect() as connection:
        raw = connection.exec_driver_sql("SELECT status FROM domain_state").scalar_one()

    assert raw == "pending-removal"


def test_store_over_sqlite_applies_chunks(sqlite_unit_of_work: UowFactory) -> None:
    store = DomainStateStore(sqlite_unit_of_work, chunk_size=2)
    updates = [
        DomainState(name=f"{index}.example", status=PreloadStatus.PRELOADED) for index in range(5)
    ]

    progress = list(store.apply_batch(updates))

    assert len(progress) == 6
    assert len(store.list_by_status(PreloadStatus.PRELOADED)) == 5
    assert store.mark_pending("0.example", submitted_at=datetime.now(tz=UTC)) is False
    assert store.mark_pending("new.example", submitted_at=datetime.now(tz=UTC)) is True
    assert store.get("new.example").status is PreloadStatus.PENDING


def test_table_has_status_index(sqlite_engine: Engine) -> None:
    with sqlite_engine.connect() as connection:
        rows = connection.exec_driver_sql("PRAGMA index_list('domain_state')").all()

    assert "ix_domain_state_status" in {row[1] for row in rows}


def test_core_insert_and_select_use_status_type(sqlite_engine: Engine) -> None:
    with sqlite_engine.begin() as connection:
        connection.execute(
            insert(domain_state_table).values(name="a.com", status=PreloadStatus.REMOVED)
        )
        status = connection.execute(select(domain_state_table.c.status)).scalar_one()

    assert status is PreloadStatus.REMOVED
