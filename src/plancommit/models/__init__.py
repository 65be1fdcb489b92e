"""Pydantic models used across the project."""

from __future__ import annotations

from plancommit.models.outcome import Empty, Halted, HaltReason, ParseOutcome, Parsed, Unknown
from plancommit.models.plan import Constraint, Header, Plan, Task, nesting_depth, walk_tasks

__all__ = [
    "Constraint",
    "Empty",
    "Halted",
    "HaltReason",
    "Header",
    "ParseOutcome",
    "Parsed",
    "Plan",
    "Task",
    "Unknown",
    "nesting_depth",
    "walk_tasks",
]
