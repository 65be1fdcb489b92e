"""Canonical text rendering of plans.

The output is the unique text form of a plan: parsing it gives the same plan back, and
formatting that plan again gives the same text.
"""

from __future__ import annotations

from typing import Iterator

from plancommit.config import DEFAULT_LIMITS, ParserLimits
from plancommit.errors import FormatError
from plancommit.grammar.patterns import (
    CONSTRAINT_RE,
    DIRECTIVE_TEXT_RE,
    INDENT,
    description_problem,
    header_problem,
    is_blank,
)
from plancommit.models.outcome import Empty, ParseOutcome, Unknown
from plancommit.models.plan import Constraint, Header, Plan, Task
from plancommit.validation.validator import Invalid, Valid, ValidationReport


def _single_line(value: str, what: str) -> str:
    if "\n" in value or "\r" in value:
        raise FormatError(f"{what} must fit on one line: {value!r}")
    return value


def format_header(header: Header, limits: ParserLimits | None = None) -> str:
    limits = limits or DEFAULT_LIMITS
    problem = header_problem(header.type, header.scope, header.title, limits.max_title_length)
    if problem is not None:
        raise FormatError(problem)

    text = header.type.lower()
    if header.scope is not None:
        text += f"({header.scope.lower()})"
    if header.breaking:
        text += "!"
    text += ":"
    if header.title is not None:
        text += " " + header.title
    return text


def format_constraints(constraints: tuple[Constraint, ...]) -> list[str]:
    lines = []
    for c in constraints:
        line = f"- {_single_line(c.key, 'constraint key')}: {_single_line(c.value, 'constraint value')}"
        # The parser silently drops constraint lines that do not match.
        if not CONSTRAINT_RE.match(line):
            raise FormatError(f"constraint would be dropped on read: {line!r}")
        lines.append(line)
    return lines


def _task_lines(tasks: tuple[Task, ...], depth: int) -> Iterator[str]:
    for task in tasks:
        if not task.text.strip():
            raise FormatError("task text must not be blank")
        mark = "x" if task.completed else " "
        yield f"{INDENT * depth}- [{mark}]: {_single_line(task.text, 'task text')}"
        yield from _task_lines(task.children, depth + 1)


def format_tasks(tasks: tuple[Task, ...]) -> list[str]:
    """Render the tasks section, heading included."""

    done = bool(tasks) and all(task.all_completed for task in tasks)
    heading = "Tasks [X]:" if done else "Tasks [ ]:"
    return [heading, *_task_lines(tasks, 0)]


def format_directive(directive: str) -> str:
    text = directive.upper()
    if not DIRECTIVE_TEXT_RE.match(text):
        raise FormatError(f"directive must be words separated by single spaces: {directive!r}")
    return f"~~~ {text} ~~~"


def _collapse_blank_lines(text: str) -> str:
    out: list[str] = []
    for line in text.split("\n"):
        if is_blank(line):
            if out and out[-1] == "":
                continue
            out.append("")
        else:
            out.append(line)
    while out and out[0] == "":
        out.pop(0)
    while out and out[-1] == "":
        out.pop()
    return "\n".join(out)


def format_plan(plan: Plan, limits: ParserLimits | None = None) -> str:
    """Render a plan as canonical text.

    Raises:
        FormatError: The plan holds text that could not be parsed back unchanged.
    """

    sections = [format_header(plan.header, limits)]
    if plan.description is not None:
        problem = description_problem(plan.description)
        if problem is not None:
            raise FormatError(problem)
        sections.append(plan.description)
    if plan.constraints:
        sections.append("\n".join(format_constraints(plan.constraints)))
    if plan.tasks is not None:
        sections.append("\n".join(format_tasks(plan.tasks)))
    if plan.directive is not None:
        sections.append(format_directive(plan.directive))
    return _collapse_blank_lines("\n\n".join(sections))


def format_outcome(
    outcome: ParseOutcome | ValidationReport, limits: ParserLimits | None = None
) -> str:
    """Render a parse outcome or validation report.

    Empty documents render as an empty string. Outcomes without a header cannot be
    rendered and raise `FormatError`.
    """

    if isinstance(outcome, Empty):
        return ""
    if isinstance(outcome, (Unknown, Invalid)):
        raise FormatError(f"cannot format a {outcome.kind} outcome")
    if outcome.plan is None:
        if isinstance(outcome, Valid) and outcome.state == "empty":
            return ""
        raise FormatError("cannot format an outcome without a header")
    return format_plan(outcome.plan, limits)
