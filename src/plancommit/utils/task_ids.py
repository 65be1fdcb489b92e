"""Stable task identifiers.

Tasks carry no ids in the text format. These helpers derive URL-safe ids from task text
so callers can keep referring to a task across edits: the text is split at its first
colon into summary and details, and the summary is slugified. Siblings sharing a slug
get `-1`, `-2`, ... suffixes in order of appearance.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict

from plancommit.errors import TaskNotFoundError
from plancommit.models.plan import Task, walk_tasks

_NON_SLUG_RE = re.compile(r"[^a-z0-9\s-]")
_SPACE_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")


class TaskRef(BaseModel):
    """Flat view of one task with its derived id."""

    model_config = ConfigDict(frozen=True)

    id: str
    summary: str
    details: str
    completed: bool
    level: int
    parent_id: str | None = None


def slugify(text: str) -> str:
    slug = _NON_SLUG_RE.sub("", text.lower())
    slug = _SPACE_RE.sub("-", slug)
    slug = _DASHES_RE.sub("-", slug)
    return slug.strip("-") or "task"


def split_task_text(text: str) -> tuple[str, str]:
    """Split `summary: details` at the first colon."""

    summary, sep, details = text.partition(":")
    if not sep:
        return text.strip(), ""
    return summary.strip(), details.strip()


def _sibling_ids(tasks: tuple[Task, ...]) -> list[str]:
    seen: set[str] = set()
    ids: list[str] = []
    for task in tasks:
        base = slugify(split_task_text(task.text)[0])
        candidate = base
        counter = 1
        while candidate in seen:
            candidate = f"{base}-{counter}"
            counter += 1
        seen.add(candidate)
        ids.append(candidate)
    return ids


def index_tasks(tasks: tuple[Task, ...]) -> list[TaskRef]:
    """Flatten a task forest into `TaskRef`s, depth first.

    Args:
        tasks: Task forest.

    Returns:
        One ref per task, parents before their children.
    """

    refs: list[TaskRef] = []

    def visit(level_tasks: tuple[Task, ...], level: int, parent_id: str | None) -> None:
        for task, task_id in zip(level_tasks, _sibling_ids(level_tasks)):
            summary, details = split_task_text(task.text)
            refs.append(
                TaskRef(
                    id=task_id,
                    summary=summary,
                    details=details,
                    completed=task.completed,
                    level=level,
                    parent_id=parent_id,
                )
            )
            visit(task.children, level + 1, task_id)

    visit(tasks, 0, None)
    return refs


def find_task(tasks: tuple[Task, ...], task_id: str) -> Task:
    """Resolve an id from `index_tasks` back to its task.

    Ids are unique among siblings only, so the first depth-first match wins.
    """

    for ref, task in zip(index_tasks(tasks), walk_tasks(tasks)):
        if ref.id == task_id:
            return task
    raise TaskNotFoundError(f"no task with id {task_id!r}")
