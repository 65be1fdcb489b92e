"""Plan editing operations and progress tracking."""

from __future__ import annotations

from plancommit.editing.operations import (
    mark_all,
    mark_task,
    set_constraints,
    set_description,
    set_directive,
    set_header,
    set_tasks,
    start_plan,
)
from plancommit.editing.progress import PlanProgress, derive_progress, first_incomplete

__all__ = [
    "PlanProgress",
    "derive_progress",
    "first_incomplete",
    "mark_all",
    "mark_task",
    "set_constraints",
    "set_description",
    "set_directive",
    "set_header",
    "set_tasks",
    "start_plan",
]
