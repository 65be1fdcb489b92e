"""Tests for parse -> validate -> format round trips."""

from __future__ import annotations

import pytest

from plancommit.formatting import format_outcome, format_plan
from plancommit.grammar.parser import parse
from plancommit.models import Constraint, Header, Parsed, Plan, Task
from plancommit.pipeline import normalize
from plancommit.validation import Valid, validate

CANONICAL = [
    "feat:",
    "fix!:",
    "fix(core)!: tighten parser",
    "feat(api): add endpoint\n\nWire the handler.\nKeep the old route.",
    "feat(api): add endpoint\n\nWire the handler.\n\n- Do not: break clients\n- Never: drop data",
    "docs(readme): refresh\n\nintro\n\n~~~ PROCEED ~~~",
    "chore(ci): bump runners\n\nd\n\nTasks [ ]:",
    "refactor(grammar): split stages\n\nd\n\nTasks [X]:\n- [x]: a\n  - [x]: b",
    "build(deps): pin\n\nd\n\n- Avoid: floating versions\n\nTasks [ ]:\n- [x]: lock\n"
    "  - [ ]: verify\n    - [ ]: ci\n- [ ]: release\n\n~~~ CONTINUE WITH TESTING ~~~",
]


@pytest.mark.parametrize("text", CANONICAL)
def test_canonical_text_round_trips(text: str) -> None:
    """It should format a canonical document back to the exact same text."""

    outcome = parse(text)
    assert isinstance(outcome, Parsed)
    report = validate(outcome)
    assert isinstance(report, Valid)
    assert format_outcome(report) == text
    assert format_outcome(outcome) == text


PLANS = [
    Plan(header=Header(type="feat")),
    Plan(header=Header(type="fix", scope="core", breaking=True, title="t")),
    Plan(header=Header(type="fix", scope="core", title="t"), directive="GO"),
    Plan(header=Header(type="fix", scope="core", title="t"), description="a\nb"),
    Plan(
        header=Header(type="fix", scope="core", title="t"),
        description="a",
        constraints=(Constraint(key="Cannot", value="skip review"),),
        directive="STOP",
    ),
    Plan(
        header=Header(type="infra", scope="k8s", title="t"),
        description="a",
        constraints=(),
        tasks=(
            Task(text="one", children=(Task(completed=True, text="two"),)),
            Task(completed=True, text="three: with details"),
        ),
    ),
]


@pytest.mark.parametrize("plan", PLANS)
def test_formatted_plan_parses_back(plan: Plan) -> None:
    """It should parse formatted text back to the plan that produced it."""

    text = format_plan(plan)
    assert parse(text) == Parsed.of(plan)
    assert format_plan(parse(text).plan) == text


@pytest.mark.parametrize(
    ("text", "canonical"),
    [
        (
            "feat(api): t\n\n\n\nd\n- [ ]: a",
            "feat(api): t\n\nd\n\nTasks [ ]:\n- [ ]: a",
        ),
        (
            "feat(api): t\n\nd\n\nTasks [X]:\n- [ ]: a\n   - [x]: b",
            "feat(api): t\n\nd\n\nTasks [ ]:\n- [ ]: a\n  - [x]: b",
        ),
        (
            "fix(api): t\n\nd\n- Never: X\n- Never: y\n\n\n",
            "fix(api): t\n\nd\n\n- Never: y",
        ),
        ("fix(api): t\ndescription", "fix(api):"),
        ("fix(api): t\n\nd\n\nJunk", "fix(api): t\n\nd"),
    ],
)
def test_normalize_reaches_fixed_point(text: str, canonical: str) -> None:
    """It should rewrite loose text once and then leave it unchanged."""

    first = normalize(text)
    assert first == canonical
    assert normalize(first) == first
