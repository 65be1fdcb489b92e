"""Tests for progress tracking."""

from __future__ import annotations

from plancommit.editing import derive_progress, first_incomplete
from plancommit.grammar.parser import parse
from plancommit.models import Empty, Task, Unknown


def test_no_plan_is_uninitialized() -> None:
    """It should report outcomes without a plan as uninitialized."""

    for outcome in (Empty(), Unknown()):
        progress = derive_progress(outcome)
        assert progress.phase == "uninitialized"
        assert not progress.has_goal


def test_planning_without_tasks() -> None:
    """It should stay in planning while no task exists."""

    progress = derive_progress(parse("feat(api): t\n\nd\n- Never: x"))
    assert progress.phase == "planning"
    assert progress.has_goal
    assert progress.has_description
    assert progress.has_constraints
    assert not progress.has_tasks
    assert progress.current_task is None


def test_executing_and_complete() -> None:
    """It should move from planning to executing to complete as tasks are done."""

    base = "feat(api): t\n\nd\n\n- [{a}]: a\n  - [{b}]: b\n- [{c}]: c"

    planning = derive_progress(parse(base.format(a=" ", b=" ", c=" ")))
    assert planning.phase == "planning"
    assert planning.current_task == "a"
    assert planning.total_tasks == 3

    executing = derive_progress(parse(base.format(a="x", b=" ", c=" ")))
    assert executing.phase == "executing"
    assert executing.current_task == "b"
    assert executing.completed_tasks == 1

    complete = derive_progress(parse(base.format(a="x", b="x", c="x")))
    assert complete.phase == "complete"
    assert complete.current_task is None
    assert complete.snapshot()["completed_tasks"] == 3


def test_first_incomplete() -> None:
    """It should find the first open task depth first."""

    tasks = (Task(completed=True, text="a", children=(Task(completed=True, text="b"),)), Task(text="c"))
    assert first_incomplete(tasks).text == "c"
    assert first_incomplete(()) is None
