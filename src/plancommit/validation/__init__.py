"""Semantic validation of parsed plans."""

from __future__ import annotations

from plancommit.validation.schema import (
    ValidatedConstraint,
    ValidatedHeader,
    ValidatedPlan,
    ValidatedTask,
)
from plancommit.validation.validator import (
    Invalid,
    Valid,
    ValidationIssue,
    ValidationReport,
    is_valid_outcome,
    validate,
)

__all__ = [
    "Invalid",
    "Valid",
    "ValidatedConstraint",
    "ValidatedHeader",
    "ValidatedPlan",
    "ValidatedTask",
    "ValidationIssue",
    "ValidationReport",
    "is_valid_outcome",
    "validate",
]
