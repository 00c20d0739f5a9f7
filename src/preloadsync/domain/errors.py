"""Error taxonomy shared by domain services and adapters."""

from __future__ import annotations


class PreloadSyncError(RuntimeError):
    """Base class for operational failures."""


class UpstreamFetchError(PreloadSyncError):
    """Raised when the authoritative preload list cannot be retrieved or parsed."""


class EligibilityCheckError(PreloadSyncError):
    """Raised when the eligibility predicate could not be evaluated."""


class StoreError(PreloadSyncError):
    """Raised when the domain state backend fails."""


class StoreTimeoutError(StoreError):
    """Raised when a backend operation exceeds its time budget."""


class StoreReadError(StoreError):
    """Raised when a read needed before planning any write fails."""


class UnknownStatusError(StoreError):
    """Raised when a stored status is not one of the known values."""

    def __init__(self, value: object) -> None:
        super().__init__(f"unrecognized stored status {value!r}")
        self.value = value


class BatchWriteError(StoreError):
    """Raised when a chunk of a batch write fails.

    Chunks written before the failing one stay applied; ``applied`` counts them.
    """

    def __init__(self, message: str, *, applied: int, total: int) -> None:
        super().__init__(message)
        self.applied = applied
        self.total = total
