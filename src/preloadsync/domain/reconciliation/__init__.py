"""Reconciliation of recorded domain states against the upstream preload list."""

from __future__ import annotations

from .engine import ProgressSink, ReconcileSummary, ReconciliationEngine
from .plan import SELF_REJECTED_MESSAGE, ReconciliationPlan, plan_reconciliation

__all__ = [
    "SELF_REJECTED_MESSAGE",
    "ProgressSink",
    "ReconcileSummary",
    "ReconciliationEngine",
    "ReconciliationPlan",
    "plan_reconciliation",
]
