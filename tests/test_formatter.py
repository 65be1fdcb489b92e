"""Tests for canonical formatting."""

from __future__ import annotations

import pytest

from plancommit.config import ParserLimits
from plancommit.errors import FormatError
from plancommit.formatting import format_directive, format_header, format_outcome, format_plan, format_tasks
from plancommit.grammar.parser import parse
from plancommit.models import Constraint, Empty, Halted, HaltReason, Header, Parsed, Plan, Task, Unknown
from plancommit.validation import Invalid, Valid, validate

HEADER = Header(type="feat", scope="api", title="add endpoint")


def test_header_variants() -> None:
    """It should render each optional header part only when present."""

    assert format_header(Header(type="feat")) == "feat:"
    assert format_header(Header(type="fix", breaking=True)) == "fix!:"
    assert format_header(Header(type="fix", scope="core")) == "fix(core):"
    assert format_header(Header(type="fix", scope="core", breaking=True, title="x")) == "fix(core)!: x"


def test_header_is_lowercased() -> None:
    """It should lowercase type and scope but keep the title as written."""

    assert format_header(Header(type="FEAT", scope="API", title="Add Endpoint")) == "feat(api): Add Endpoint"


def test_full_plan() -> None:
    """It should separate sections with exactly one blank line."""

    plan = Plan(
        header=HEADER,
        description="Wire the handler.",
        constraints=(Constraint(key="Do not", value="break clients"),),
        tasks=(Task(completed=True, text="route", children=(Task(text="tests"),)),),
        directive="continue",
    )
    assert format_plan(plan) == (
        "feat(api): add endpoint\n"
        "\n"
        "Wire the handler.\n"
        "\n"
        "- Do not: break clients\n"
        "\n"
        "Tasks [ ]:\n"
        "- [x]: route\n"
        "  - [ ]: tests\n"
        "\n"
        "~~~ CONTINUE ~~~"
    )


def test_tasks_heading_mark() -> None:
    """It should mark the heading with X only when every task is done."""

    done = (Task(completed=True, text="a", children=(Task(completed=True, text="b"),)),)
    partly = (Task(completed=True, text="a", children=(Task(text="b"),)),)
    assert format_tasks(done)[0] == "Tasks [X]:"
    assert format_tasks(partly)[0] == "Tasks [ ]:"
    assert format_tasks(()) == ["Tasks [ ]:"]


def test_task_indentation() -> None:
    """It should indent two spaces per level."""

    tasks = (Task(text="a", children=(Task(text="b", children=(Task(completed=True, text="c"),)),)),)
    assert format_tasks(tasks)[1:] == ["- [ ]: a", "  - [ ]: b", "    - [x]: c"]


def test_absent_sections_are_omitted() -> None:
    """It should skip absent tasks and empty constraint lists."""

    plan = Plan(header=HEADER, description="d", constraints=())
    assert format_plan(plan) == "feat(api): add endpoint\n\nd"


def test_empty_task_list_keeps_heading() -> None:
    """It should render a present but empty task list as its heading."""

    plan = Plan(header=HEADER, description="d", constraints=(), tasks=())
    assert format_plan(plan) == "feat(api): add endpoint\n\nd\n\nTasks [ ]:"


SPLIT_DESCRIPTIONS = [
    "first paragraph\n\nsecond paragraph",
    "a\n   \nb",
    "Steps\n- Do not: panic",
    "Steps\n- [ ]: later",
    "Intro\nTasks [ ]:",
    "~~~ GO ~~~",
    "line\r\nbreak",
    "",
]


@pytest.mark.parametrize("description", SPLIT_DESCRIPTIONS)
def test_description_that_would_split_is_refused(description: str) -> None:
    """It should refuse to render a description the parser would read back differently."""

    plan = Plan(header=HEADER, description="d").model_copy(update={"description": description})
    with pytest.raises(FormatError):
        format_plan(plan)


@pytest.mark.parametrize(
    "description",
    [
        "one line",
        "intro\n- plain bullet\n[wip] notes",
        "a\n  - [ ]: indented\nb",
        "text\n~~~ GO ~~~",
    ],
)
def test_description_parses_back(description: str) -> None:
    """It should render descriptions that read back as the same single block."""

    plan = Plan(header=HEADER, description=description, constraints=(), tasks=(Task(text="a"),))
    text = format_plan(plan)
    assert parse(text) == Parsed.of(plan)
    assert format_plan(parse(text).plan) == text


@pytest.mark.parametrize(
    "header",
    [
        Header(type="fix", scope="s", title="a" * 121),
        Header(type="fix", scope="my scope", title="t"),
        Header(type="fix", scope="a(b)", title="t"),
        Header(type="fix", scope=""),
        Header(type="fix-up"),
        Header(type=""),
    ],
)
def test_header_that_would_not_parse_back(header: Header) -> None:
    """It should refuse headers the parser would reject or cut short."""

    with pytest.raises(FormatError):
        format_header(header)


def test_header_title_limit_follows_limits() -> None:
    """It should check the title against the given limits."""

    header = Header(type="fix", scope="s", title="abcd")
    assert format_header(header) == "fix(s): abcd"
    with pytest.raises(FormatError):
        format_header(header, ParserLimits(max_title_length=3))
    assert format_header(Header(type="fix", scope="s", title="a" * 120)).endswith("a" * 120)


@pytest.mark.parametrize(
    "constraint",
    [
        Constraint(key="Never", value="Skip"),
        Constraint(key="bad key", value="x"),
        Constraint(key="Never", value="1x"),
    ],
)
def test_constraint_that_would_be_dropped(constraint: Constraint) -> None:
    """It should refuse constraints the parser would silently drop."""

    plan = Plan(header=HEADER, description="d", constraints=(constraint,))
    with pytest.raises(FormatError):
        format_plan(plan)


def test_directive_is_uppercased() -> None:
    """It should uppercase the directive text."""

    assert format_directive("proceed now") == "~~~ PROCEED NOW ~~~"


@pytest.mark.parametrize(
    "plan",
    [
        Plan(header=Header(type="fix", scope="s", title="")),
        Plan(header=Header(type="fix", scope="s", title="two\nlines")),
        Plan(header=HEADER, description="d", tasks=(Task(text="a\nb"),)),
        Plan(header=HEADER, description="d", tasks=(Task(text="   "),)),
        Plan(header=HEADER, description="d", constraints=(Constraint(key="Never", value="x\ny"),)),
        Plan(header=HEADER, directive="go-now"),
        Plan(header=HEADER, directive="go  now"),
    ],
)
def test_unrenderable_plans_raise(plan: Plan) -> None:
    """It should raise FormatError for plans that would not parse back unchanged."""

    with pytest.raises(FormatError):
        format_plan(plan)


def test_format_outcome_variants() -> None:
    """It should render empty outcomes as empty text and refuse headerless ones."""

    assert format_outcome(Empty()) == ""
    assert format_outcome(Valid(state="empty", stage=0)) == ""
    for outcome in (Unknown(), Invalid(errors=()), Halted.of(None, HaltReason.INPUT_REJECTED)):
        with pytest.raises(FormatError):
            format_outcome(outcome)


def test_format_outcome_accepts_parse_and_report() -> None:
    """It should render both a parse outcome and its validation report."""

    outcome = parse("feat(api): add endpoint\n\nd")
    assert format_outcome(outcome) == "feat(api): add endpoint\n\nd"
    assert format_outcome(validate(outcome)) == "feat(api): add endpoint\n\nd"
