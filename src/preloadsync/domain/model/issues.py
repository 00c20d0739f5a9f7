"""Structured validation issues returned to submitters."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(slots=True, frozen=True)
class Issue:
    code: str
    summary: str
    message: str

    def to_json(self) -> dict[str, str]:
        return {"code": self.code, "summary": self.summary, "message": self.message}


@dataclass(slots=True, frozen=True)
class Issues:
    """Errors and warnings for one domain. No errors means the domain passed."""

    errors: tuple[Issue, ...] = ()
    warnings: tuple[Issue, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def with_error(self, issue: Issue) -> Issues:
        return replace(self, errors=(*self.errors, issue))

    def with_warning(self, issue: Issue) -> Issues:
        return replace(self, warnings=(*self.warnings, issue))

    def to_json(self) -> dict[str, list[dict[str, str]]]:
        return {
            "errors": [issue.to_json() for issue in self.errors],
            "warnings": [issue.to_json() for issue in self.warnings],
        }
