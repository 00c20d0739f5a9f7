"""Application configuration helpers."""

from __future__ import annotations

from .eligibility import CheckerConfig, get_checker_config
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .preload_list import PreloadListConfig, get_preload_list_config
from .reconcile import ReconcileConfig, get_reconcile_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "CheckerConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "PreloadListConfig",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_checker_config",
    "get_database_config",
    "get_preload_list_config",
    "get_reconcile_config",
    "get_storage_config",
]
