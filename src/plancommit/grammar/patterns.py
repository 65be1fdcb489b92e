"""Line patterns and vocabularies of the plan text format.

Layout:
    type(scope)!: title          <- header; scope, `!` and title are optional
                                 <- exactly one blank line
    description line             <- one or more lines, no blank line inside
    - Key: value                 <- constraints, after the description
                                 <- blank line
    Tasks [ ]:                   <- tasks heading, `[X]` once every task is done
    - [ ]: task                  <- tasks, nested by indentation
      - [x]: sub-task
                                 <- blank line
    ~~~ DIRECTIVE ~~~            <- optional one-line directive

The vocabularies and the directive marker are part of the wire contract: consumers grep
for them, so changing them is a format break.
"""

from __future__ import annotations

import re
from typing import Literal, get_args

CommitType = Literal[
    "feat",
    "fix",
    "refactor",
    "build",
    "chore",
    "docs",
    "lint",
    "infra",
    "spec",
]

ConstraintKey = Literal[
    "Do not",
    "Never",
    "Avoid",
    "Decide against",
    "Must not",
    "Cannot",
    "Forbidden",
]

COMMIT_TYPES: tuple[str, ...] = get_args(CommitType)
CONSTRAINT_KEYS: tuple[str, ...] = get_args(ConstraintKey)

HEADER_RE = re.compile(
    r"^(?P<type>[a-z]+)(?:\((?P<scope>[^()\s]+)\))?(?P<breaking>!)?:(?P<rest>.*)$"
)
TYPE_RE = re.compile(r"^[a-z]+$")
SCOPE_TEXT_RE = re.compile(r"^[^()\s]+$")
SCOPE_RE = re.compile(r"^[a-z][a-z0-9-]*$")

CONSTRAINT_RE = re.compile(r"^- (?P<key>[A-Z][a-z ]*): (?P<value>[a-z].*)$")

TASK_RE = re.compile(r"^(?P<indent>[ \t]*)- \[(?P<mark>[x ])\]: (?P<text>.*\S.*)$")
# Anything that reads as an attempt at a task line, well-formed or not.
TASK_LIKE_RE = re.compile(r"^[ \t]*(?:-[ \t]*)?\[[^\]]*\]|^[ \t]*-[ \t]*$")
TASKS_HEADING_RE = re.compile(r"^Tasks \[(?P<mark>[ X])\]:$")

DIRECTIVE_RE = re.compile(r"^~~~ (?P<text>[A-Z]+(?: [A-Z]+)*) ~~~$")
DIRECTIVE_TEXT_RE = re.compile(r"^[A-Z]+(?: [A-Z]+)*$")

INDENT = "  "


def is_blank(line: str) -> bool:
    return not line.strip()


def is_task_like(line: str) -> bool:
    return bool(TASK_LIKE_RE.match(line))


def is_constraint_like(line: str) -> bool:
    """A `- something: something` line that is not a task."""

    return line.startswith("- ") and ": " in line and not is_task_like(line)


def is_tasks_heading(line: str) -> bool:
    return bool(TASKS_HEADING_RE.match(line))


def ends_description(line: str) -> bool:
    """True for lines that open a structured section instead of continuing prose.

    Plain bullets (`- note`) and bracketed prose (`[wip] ...`) stay in the description.
    """

    if is_tasks_heading(line):
        return True
    return line.startswith("- ") and (": " in line or is_task_like(line))


def description_problem(text: str) -> str | None:
    """Why `text` would not read back as one description block, or None if it would."""

    if not text.strip():
        return "description must not be empty"
    if "\r" in text:
        return "description must not contain carriage returns"
    lines = text.split("\n")
    if DIRECTIVE_RE.match(lines[0]):
        return "description must not start with a directive line"
    for line in lines:
        if is_blank(line):
            return "description must not contain blank lines"
        if ends_description(line):
            return f"description line {line!r} would start a new section"
    return None


def header_problem(
    type_: str, scope: str | None, title: str | None, max_title_length: int
) -> str | None:
    """Why a header would not read back unchanged once lowercased, or None."""

    if not TYPE_RE.match(type_.lower()):
        return f"type {type_!r} must be letters only"
    if scope is not None and not SCOPE_TEXT_RE.match(scope):
        return f"scope {scope!r} must not be empty or contain whitespace or parentheses"
    if title is not None:
        if not title:
            return "title must not be empty"
        if "\n" in title or "\r" in title:
            return "title must fit on one line"
        if len(title) > max_title_length:
            return f"title exceeds {max_title_length} characters"
    return None
