"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite

from preloadsync.adapters.sqlalchemy.errors import store_errors
from preloadsync.adapters.sqlalchemy.mappings import domain_state_table
from preloadsync.domain.errors import StoreError
from preloadsync.domain.model import DomainState

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from sqlalchemy import Row
    from sqlalchemy.orm import Session

    from preloadsync.domain.model import DomainName, PreloadStatus

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def _row_values(state: DomainState) -> dict[str, Any]:
    return {
        "name": state.name,
        "status": state.status,
        "message": state.message,
        "submission_date": state.submission_date,
    }


def _state_from_row(row: Row[Any]) -> DomainState:
    return DomainState(
        name=row.name,
        status=row.status,
        message=row.message,
        submission_date=row.submission_date,
    )


class SqlAlchemyDomainStateRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, name: DomainName) -> DomainState | None:
        stmt = select(domain_state_table).where(domain_state_table.c.name == name)
        with store_errors(f"reading state of {name}"):
            row = self.session.execute(stmt).one_or_none()
        return _state_from_row(row) if row is not None else None

    def names_with_status(self, status: PreloadStatus) -> list[DomainName]:
        stmt = (
            select(domain_state_table.c.name)
            .where(domain_state_table.c.status == status)
            .order_by(domain_state_table.c.name)
        )
        with store_errors(f"listing {status} domains"):
            return list(self.session.execute(stmt).scalars())

    def all(self) -> list[DomainState]:
        stmt = select(domain_state_table).order_by(domain_state_table.c.name)
        with store_errors("listing domain states"):
            return [_state_from_row(row) for row in self.session.execute(stmt)]

    def upsert_many(self, states: Sequence[DomainState]) -> None:
        if not states:
            return
        insert = self._insert()
        stmt = insert(domain_state_table)
        stmt = stmt.on_conflict_do_update(
            index_elements=[domain_state_table.c.name],
            set_={
                "status": stmt.excluded.status,
                "message": stmt.excluded.message,
                "submission_date": stmt.excluded.submission_date,
            },
        )
        with store_errors(f"writing {len(states)} domain states"):
            self.session.execute(stmt, [_row_values(state) for state in states])

    def put_unless_status(
        self,
        state: DomainState,
        *,
        blocked: Collection[PreloadStatus],
    ) -> bool:
        insert = self._insert()
        stmt = insert(domain_state_table).values(_row_values(state))
        stmt = stmt.on_conflict_do_update(
            index_elements=[domain_state_table.c.name],
            set_={
                "status": stmt.excluded.status,
                "message": stmt.excluded.message,
                "submission_date": stmt.excluded.submission_date,
            },
            where=domain_state_table.c.status.not_in(list(blocked)),
        )
        with store_errors(f"writing state of {state.name}"):
            result = self.session.execute(stmt)
        # Zero rows means the existing status vetoed the update.
        return result.rowcount > 0

    def _insert(self) -> Any:
        dialect = self.session.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise StoreError(f"upserts are not supported on the {dialect} dialect") from None
