"""Task tree construction from indented task lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from plancommit.models.plan import Task


@dataclass
class _Draft:
    completed: bool
    text: str
    children: list[_Draft] = field(default_factory=list)

    def freeze(self) -> Task:
        return Task(
            completed=self.completed,
            text=self.text,
            children=tuple(child.freeze() for child in self.children),
        )


def build_task_tree(entries: Iterable[tuple[int, bool, str]]) -> tuple[Task, ...]:
    """Nest `(indent, completed, text)` entries by relative indentation.

    Each entry is compared against a stack of open ancestors: deeper than the top makes
    it a child, equal makes it a sibling, shallower closes ancestors until a shallower
    one (or none) is left. Indent widths do not need to be uniform.
    """

    roots: list[_Draft] = []
    stack: list[tuple[int, _Draft]] = []

    for indent, completed, text in entries:
        draft = _Draft(completed=completed, text=text)
        while stack and stack[-1][0] >= indent:
            stack.pop()
        if stack:
            stack[-1][1].children.append(draft)
        else:
            roots.append(draft)
        stack.append((indent, draft))

    return tuple(draft.freeze() for draft in roots)
