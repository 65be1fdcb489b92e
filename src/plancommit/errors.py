"""Exceptions raised on caller misuse.

Malformed text never raises: the parser reports it as a `Halted` or `Unknown`
outcome and the validator as a list of issues. The exceptions below are for
code paths that skipped that contract.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from plancommit.validation.validator import ValidationIssue


class PlanError(Exception):
    """Base class for plancommit errors."""


class FormatError(PlanError, ValueError):
    """A plan cannot be rendered into text that parses back to the same plan."""


class PlanParseError(PlanError):
    """Text did not parse into a complete plan."""

    def __init__(self, message: str, outcome: Any) -> None:
        super().__init__(message)
        self.outcome = outcome


class PlanValidationError(PlanError):
    """A parsed plan broke one or more validation rules."""

    def __init__(self, issues: tuple[ValidationIssue, ...]) -> None:
        summary = "; ".join(f"{i.field}: {i.message}" for i in issues)
        super().__init__(f"plan failed validation: {summary}")
        self.issues = issues


class PlanStateError(PlanError):
    """An edit needs a section the plan does not have yet."""


class TaskNotFoundError(PlanError, LookupError):
    """No task matched the requested text or id."""
