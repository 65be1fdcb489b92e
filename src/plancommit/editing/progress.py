"""Plan progress derived from a parse outcome."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from plancommit.models.outcome import ParseOutcome
from plancommit.models.plan import Task, walk_tasks

PlanPhase = Literal["uninitialized", "planning", "executing", "complete"]


class PlanProgress(BaseModel):
    """Where a plan stands, as seen by the agent driving it."""

    model_config = ConfigDict(frozen=True)

    phase: PlanPhase
    has_goal: bool = False
    has_description: bool = False
    has_constraints: bool = False
    has_tasks: bool = False
    current_task: str | None = None
    total_tasks: int = 0
    completed_tasks: int = 0

    def snapshot(self) -> dict[str, str | int | bool | None]:
        return self.model_dump()


def first_incomplete(tasks: tuple[Task, ...]) -> Task | None:
    """First task not yet completed, depth first."""

    for task in walk_tasks(tasks):
        if not task.completed:
            return task
    return None


def derive_progress(outcome: ParseOutcome) -> PlanProgress:
    plan = getattr(outcome, "plan", None)
    if plan is None:
        return PlanProgress(phase="uninitialized")

    tasks = plan.tasks or ()
    all_tasks = list(walk_tasks(tasks))
    total = len(all_tasks)
    completed = sum(1 for task in all_tasks if task.completed)

    phase: PlanPhase
    if total == 0:
        phase = "planning"
    elif completed == total:
        phase = "complete"
    elif completed > 0:
        phase = "executing"
    else:
        phase = "planning"

    current = first_incomplete(tasks)
    return PlanProgress(
        phase=phase,
        has_goal=True,
        has_description=plan.description is not None,
        has_constraints=bool(plan.constraints),
        has_tasks=total > 0,
        current_task=current.text if current is not None else None,
        total_tasks=total,
        completed_tasks=completed,
    )
