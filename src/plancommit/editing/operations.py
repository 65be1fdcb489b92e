"""Plan editing operations.

Each operation takes a plan and returns a new one; nothing is mutated in place. The
caller formats the result and writes it back whole.
"""

from __future__ import annotations

from typing import Iterable, Sequence, Union

from plancommit.errors import PlanStateError, TaskNotFoundError
from plancommit.grammar.patterns import description_problem
from plancommit.logging import get_logger
from plancommit.models.plan import Constraint, Header, Plan, Task

logger = get_logger(__name__)

# `(completed, text, children)` as accepted by `set_tasks`.
TaskTuple = tuple[bool, str, Sequence["TaskInput"]]
TaskInput = Union[Task, TaskTuple]


def start_plan(type: str, scope: str, title: str, *, breaking: bool = False) -> Plan:  # noqa: A002
    """Create a plan holding only a titled header."""

    return Plan(header=Header(type=type, scope=scope, breaking=breaking, title=title))


def set_header(
    plan: Plan,
    *,
    type: str | None = None,  # noqa: A002
    scope: str | None = None,
    title: str | None = None,
    breaking: bool | None = None,
) -> Plan:
    """Replace header fields; fields left as None keep their current value."""

    current = plan.header
    header = Header(
        type=type if type is not None else current.type,
        scope=scope if scope is not None else current.scope,
        title=title if title is not None else current.title,
        breaking=breaking if breaking is not None else current.breaking,
    )
    return Plan(
        header=header,
        description=plan.description,
        constraints=plan.constraints,
        tasks=plan.tasks,
        directive=plan.directive,
    )


def set_description(plan: Plan, description: str) -> Plan:
    if plan.header.title is None:
        raise PlanStateError("set a header title before the description")
    description = description.strip()
    problem = description_problem(description)
    if problem is not None:
        raise PlanStateError(problem)
    return plan.model_copy(update={"description": description})


def set_constraints(plan: Plan, constraints: Iterable[Constraint | tuple[str, str]]) -> Plan:
    """Replace the constraint list, keeping the given order."""

    if plan.description is None:
        raise PlanStateError("set a description before constraints")
    items = tuple(
        c if isinstance(c, Constraint) else Constraint(key=c[0], value=c[1]) for c in constraints
    )
    return plan.model_copy(update={"constraints": items})


def _to_task(item: TaskInput) -> Task:
    if isinstance(item, Task):
        return item
    completed, text, children = item
    return Task(completed=completed, text=text, children=tuple(_to_task(c) for c in children))


def set_tasks(plan: Plan, tasks: Iterable[TaskInput]) -> Plan:
    """Replace the task forest."""

    if plan.description is None:
        raise PlanStateError("set a description before tasks")
    forest = tuple(_to_task(item) for item in tasks)
    return plan.model_copy(update={"tasks": forest, "constraints": plan.constraints or ()})


def _replace_first(
    tasks: tuple[Task, ...], text: str, completed: bool | None
) -> tuple[tuple[Task, ...], bool]:
    """Rebuild the forest with the first task matching `text` updated, depth first."""

    out: list[Task] = []
    found = False
    for task in tasks:
        if found:
            out.append(task)
            continue
        if task.text == text:
            new_state = (not task.completed) if completed is None else completed
            out.append(task.model_copy(update={"completed": new_state}))
            found = True
            continue
        children, found = _replace_first(task.children, text, completed)
        out.append(task.model_copy(update={"children": children}) if found else task)
    return tuple(out), found


def mark_task(plan: Plan, text: str, completed: bool | None = True) -> Plan:
    """Set the completion of the first task whose text matches exactly.

    Args:
        plan: Plan to edit.
        text: Task text to match.
        completed: New state; None toggles the current state.

    Raises:
        TaskNotFoundError: No task has this text.
    """

    tasks, found = _replace_first(plan.tasks or (), text, completed)
    if not found:
        raise TaskNotFoundError(f"no task with text {text!r}")
    logger.info("Task marked", extra={"task": text, "completed": completed})
    return plan.model_copy(update={"tasks": tasks})


def _mark_forest(tasks: tuple[Task, ...], completed: bool) -> tuple[Task, ...]:
    return tuple(
        Task(completed=completed, text=t.text, children=_mark_forest(t.children, completed))
        for t in tasks
    )


def mark_all(plan: Plan, completed: bool = True) -> Plan:
    """Mark the whole document complete or incomplete by setting every task."""

    if not plan.tasks:
        raise PlanStateError("the plan has no tasks to mark")
    logger.info("All tasks marked", extra={"completed": completed, "task_count": len(plan.tasks)})
    return plan.model_copy(update={"tasks": _mark_forest(plan.tasks, completed)})


def set_directive(plan: Plan, directive: str | None) -> Plan:
    """Attach a trailing directive, or remove it with None."""

    if directive is not None:
        if plan.header.title is None:
            raise PlanStateError("set a header title before a directive")
        directive = " ".join(directive.split()).upper()
        if not directive:
            raise PlanStateError("directive must not be empty")
    return plan.model_copy(update={"directive": directive})
