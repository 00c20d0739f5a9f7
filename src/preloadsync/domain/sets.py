"""Ordered set arithmetic used by reconciliation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable


def difference[T: Hashable](minuend: Iterable[T], subtrahend: Iterable[T]) -> list[T]:
    """Return the items of ``minuend`` that do not appear in ``subtrahend``.

    Order and repeats of ``minuend`` are kept as they are.
    """

    excluded = set(subtrahend)
    return [item for item in minuend if item not in excluded]
