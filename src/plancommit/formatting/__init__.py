"""Canonical plan formatting."""

from __future__ import annotations

from plancommit.formatting.formatter import (
    format_constraints,
    format_directive,
    format_header,
    format_outcome,
    format_plan,
    format_tasks,
)

__all__ = [
    "format_constraints",
    "format_directive",
    "format_header",
    "format_outcome",
    "format_plan",
    "format_tasks",
]
