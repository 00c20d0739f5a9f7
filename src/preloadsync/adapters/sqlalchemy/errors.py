"""Translation of SQLAlchemy failures into store errors."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import exc as sa_exc

from preloadsync.domain.errors import StoreError, StoreTimeoutError, UnknownStatusError

if TYPE_CHECKING:
    from collections.abc import Iterator

# Busy timeout (sqlite) and statement timeout (postgresql).
_TIMEOUT_MARKERS = ("database is locked", "canceling statement due to statement timeout")


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures inside the block as store errors."""

    try:
        yield
    except sa_exc.TimeoutError as exc:
        raise StoreTimeoutError(f"{action} timed out: {exc}") from exc
    except sa_exc.SQLAlchemyError as exc:
        orig = getattr(exc, "orig", None)
        if isinstance(orig, UnknownStatusError):
            raise orig from exc
        detail = str(orig) if orig is not None else str(exc)
        if any(marker in detail for marker in _TIMEOUT_MARKERS):
            raise StoreTimeoutError(f"{action} timed out: {detail}") from exc
        raise StoreError(f"{action} failed: {detail}") from exc
