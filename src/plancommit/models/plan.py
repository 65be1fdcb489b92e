"""Structured plan models.

A plan is what a commit description holds once parsed: a conventional-commit style
header, a free-text description, negative constraints, a nested task list and an
optional trailing directive. Every model is frozen; edits build a new tree.
"""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class Header(BaseModel):
    """`type(scope)!: title` header line."""

    model_config = ConfigDict(frozen=True)

    type: str
    scope: str | None = None
    breaking: bool = False
    title: str | None = None

    @model_validator(mode="after")
    def _title_requires_scope(self) -> Header:
        if self.title is not None and self.scope is None:
            raise ValueError("a header title requires a scope")
        return self

    def without_title(self) -> Header:
        return self.model_copy(update={"title": None})


class Constraint(BaseModel):
    """A `- Key: value` constraint line."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str

    def as_pair(self) -> tuple[str, str]:
        return (self.key, self.value)


class Task(BaseModel):
    """A checklist entry owning its sub-tasks."""

    model_config = ConfigDict(frozen=True)

    completed: bool = False
    text: str
    children: tuple[Task, ...] = ()

    def walk(self) -> Iterator[Task]:
        """Yield this task and every descendant, depth first."""

        yield self
        for child in self.children:
            yield from child.walk()

    @property
    def depth(self) -> int:
        """Number of levels in this subtree; a leaf has depth 1."""

        if not self.children:
            return 1
        return 1 + max(child.depth for child in self.children)

    @property
    def all_completed(self) -> bool:
        return all(task.completed for task in self.walk())


def walk_tasks(tasks: tuple[Task, ...] | list[Task]) -> Iterator[Task]:
    """Yield every task of a forest, depth first."""

    for task in tasks:
        yield from task.walk()


def nesting_depth(tasks: tuple[Task, ...] | list[Task]) -> int:
    """Deepest 0-based level in a forest; top-level tasks sit at level 0."""

    return max((task.depth for task in tasks), default=1) - 1


class Plan(BaseModel):
    """A complete or partial plan document.

    Sections are cumulative: a description needs a titled header, constraints and tasks
    need a description. `stage` tells how far the document goes.
    """

    model_config = ConfigDict(frozen=True)

    header: Header
    description: str | None = None
    constraints: tuple[Constraint, ...] | None = None
    tasks: tuple[Task, ...] | None = None
    directive: str | None = None

    @field_validator("description")
    @classmethod
    def _description_is_one_block(cls, value: str | None) -> str | None:
        # Deferred: the grammar package imports these models.
        from plancommit.grammar.patterns import description_problem

        if value is not None:
            problem = description_problem(value)
            if problem is not None:
                raise ValueError(problem)
        return value

    @model_validator(mode="after")
    def _sections_are_cumulative(self) -> Plan:
        if self.description is not None and self.header.title is None:
            raise ValueError("a description requires a header title")
        if self.constraints is not None and self.description is None:
            raise ValueError("constraints require a description")
        if self.tasks is not None and self.description is None:
            raise ValueError("tasks require a description")
        if self.directive is not None and self.header.title is None:
            raise ValueError("a directive requires a header title")
        return self

    @property
    def stage(self) -> int:
        if self.tasks is not None:
            return 5
        if self.constraints:
            return 4
        if self.description is not None:
            return 3
        if self.header.title is not None:
            return 2
        return 1

    @property
    def is_complete(self) -> bool:
        """True when the plan has tasks and every one of them is completed."""

        return bool(self.tasks) and all(task.all_completed for task in self.tasks or ())
