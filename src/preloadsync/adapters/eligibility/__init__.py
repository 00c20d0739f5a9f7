"""Public interface for the eligibility checker adapter."""

from __future__ import annotations

from .client import HttpEligibilityChecker, translate_issues
from .schema import IssuePayload, IssuesPayload

__all__ = [
    "HttpEligibilityChecker",
    "IssuePayload",
    "IssuesPayload",
    "translate_issues",
]
