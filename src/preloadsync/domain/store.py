"""Domain state store: reads, chunked batch writes and the conditional pending write.

The store owns no connection of its own. Every operation opens a unit of work from
the injected factory, so one chunk of a batch write maps to exactly one committed
transaction on the backend.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from itertools import batched
from logging import getLogger
from typing import TYPE_CHECKING, Final

from preloadsync.domain.errors import BatchWriteError, StoreError
from preloadsync.domain.model import DomainState, PreloadStatus
from preloadsync.domain.ports.unit_of_work import DomainStateUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from datetime import datetime

    from preloadsync.domain.model import DomainName

UnitOfWorkFactory = Callable[[], DomainStateUnitOfWork]

DEFAULT_CHUNK_SIZE: Final[int] = 450

# Statuses a new submission must not overwrite.
PENDING_WRITE_BLOCKED: Final[frozenset[PreloadStatus]] = frozenset(
    {PreloadStatus.PENDING, PreloadStatus.PRELOADED, PreloadStatus.PENDING_REMOVAL}
)

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class ChunkStarted:
    """Emitted before a chunk is written."""

    size: int
    index: int
    total_chunks: int


@dataclass(slots=True, frozen=True)
class ChunkWritten:
    """Emitted after a chunk was committed; ``applied`` is the running total."""

    size: int
    applied: int


type BatchProgress = ChunkStarted | ChunkWritten


class DomainStateStore:
    """Durable domain states keyed by name."""

    def __init__(
        self,
        unit_of_work_factory: UnitOfWorkFactory,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self._unit_of_work_factory = unit_of_work_factory
        self.chunk_size = chunk_size

    def get(self, name: DomainName) -> DomainState:
        """Return the state for ``name``; a missing record is ``unknown``, not an error."""

        with self._unit_of_work_factory() as uow:
            state = uow.repositories.domain_states.get(name)
        return state if state is not None else DomainState.unknown(name)

    def list_by_status(self, status: PreloadStatus) -> list[DomainName]:
        with self._unit_of_work_factory() as uow:
            return uow.repositories.domain_states.names_with_status(status)

    def list_all(self) -> list[DomainState]:
        with self._unit_of_work_factory() as uow:
            return uow.repositories.domain_states.all()

    def apply_batch(self, updates: Sequence[DomainState]) -> Iterator[BatchProgress]:
        """Upsert ``updates`` chunk by chunk, yielding progress around every chunk.

        Each chunk is committed on its own. When a chunk fails, ``BatchWriteError``
        reports how many states the earlier chunks applied; nothing after the failing
        chunk is attempted. Closing the generator early leaves committed chunks as they are.
        """

        if any(state.status is PreloadStatus.UNKNOWN for state in updates):
            raise ValueError("The unknown status cannot be persisted")

        total = len(updates)
        total_chunks = -(-total // self.chunk_size)
        applied = 0
        for index, chunk in enumerate(batched(updates, self.chunk_size), start=1):
            yield ChunkStarted(size=len(chunk), index=index, total_chunks=total_chunks)
            try:
                with self._unit_of_work_factory() as uow:
                    uow.repositories.domain_states.upsert_many(chunk)
                    uow.commit()
            except StoreError as exc:
                log.error(
                    "Chunk %s/%s failed after %s of %s states were applied",
                    index,
                    total_chunks,
                    applied,
                    total,
                )
                raise BatchWriteError(
                    f"datastore update failed after {applied} of {total} domain states "
                    f"were updated. ({exc})",
                    applied=applied,
                    total=total,
                ) from exc
            applied += len(chunk)
            yield ChunkWritten(size=len(chunk), applied=applied)

    def put(self, state: DomainState) -> None:
        for _progress in self.apply_batch([state]):
            pass

    def mark_pending(self, name: DomainName, *, submitted_at: datetime) -> bool:
        """Record a fresh submission unless the domain is already pending or preloaded.

        Returns ``False`` when the stored status blocked the write.
        """

        state = DomainState(
            name=name,
            status=PreloadStatus.PENDING,
            submission_date=submitted_at,
        )
        with self._unit_of_work_factory() as uow:
            written = uow.repositories.domain_states.put_unless_status(
                state,
                blocked=PENDING_WRITE_BLOCKED,
            )
            uow.commit()
        return written
