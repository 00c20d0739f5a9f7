"""Batch write defaults for reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass

from preloadsync.domain.store import DEFAULT_CHUNK_SIZE

from .env import positive_int_env_var


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    chunk_size: int = DEFAULT_CHUNK_SIZE


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        chunk_size=positive_int_env_var("PRELOADSYNC_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
    )
