"""Stage parser for plan documents.

Parsing walks the grammar section by section. Each section is read tentatively and only
committed once the boundary after it is confirmed (a valid next section, a blank line or
the end of the text). When a boundary is malformed the parser stops and returns the last
committed plan as a `Halted` outcome, so malformed text is always reported as data.
"""

from __future__ import annotations

from plancommit.config import DEFAULT_LIMITS, ParserLimits, Settings, load_settings
from plancommit.grammar.patterns import (
    CONSTRAINT_RE,
    DIRECTIVE_RE,
    HEADER_RE,
    TASK_RE,
    ends_description,
    is_blank,
    is_constraint_like,
    is_task_like,
    is_tasks_heading,
)
from plancommit.grammar.tasks import build_task_tree
from plancommit.logging import get_logger
from plancommit.models.outcome import Empty, Halted, HaltReason, ParseOutcome, Parsed, Unknown
from plancommit.models.plan import Constraint, Header, Plan

logger = get_logger(__name__)


class _Cursor:
    """Forward-only cursor over the lines following the header."""

    def __init__(self, lines: list[str], first_lineno: int) -> None:
        self._lines = lines
        self._first_lineno = first_lineno
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self._lines)

    def peek(self) -> str:
        return self._lines[self.pos]

    def advance(self) -> str:
        line = self._lines[self.pos]
        self.pos += 1
        return line

    def remaining(self) -> int:
        return len(self._lines) - self.pos

    def skip_blank(self) -> int:
        """Skip a run of blank lines and return how many were skipped."""

        start = self.pos
        while not self.at_end() and is_blank(self.peek()):
            self.pos += 1
        return self.pos - start

    @property
    def lineno(self) -> int:
        return self._first_lineno + self.pos


class _DocumentMachine:
    """Reads the sections after the header and tracks the committed plan."""

    def __init__(self, header: Header, body: list[str], limits: ParserLimits) -> None:
        self._header = header
        self._cursor = _Cursor(body, first_lineno=2)
        self._limits = limits
        # The title stays tentative until the separator after the header is seen.
        self._committed = Plan(header=header.without_title())

    def _commit(self, **fields: object) -> None:
        self._committed = self._committed.model_copy(update=fields)

    def _parsed(self) -> Parsed:
        return Parsed.of(self._committed)

    def _halt(self, reason: HaltReason) -> Halted:
        outcome = Halted.of(self._committed, reason, line=self._cursor.lineno)
        logger.debug(
            "Plan parse halted",
            extra={"stage": outcome.stage, "reason": reason.value, "at_line": outcome.line},
        )
        return outcome

    def run(self) -> ParseOutcome:
        cursor = self._cursor
        if cursor.at_end():
            self._commit(header=self._header)
            return self._parsed()

        if self._header.title is None:
            return self._halt(HaltReason.UNEXPECTED_CONTENT)
        if not is_blank(cursor.peek()):
            return self._halt(HaltReason.MISSING_SEPARATOR)

        self._commit(header=self._header)
        cursor.skip_blank()

        line = cursor.peek()
        if DIRECTIVE_RE.match(line):
            return self._finish(separated=True)
        if ends_description(line):
            return self._halt(HaltReason.MISSING_DESCRIPTION)

        self._commit(description=self._read_description())
        return self._read_sections()

    def _read_description(self) -> str:
        cursor = self._cursor
        lines: list[str] = []
        while not cursor.at_end():
            line = cursor.peek()
            if is_blank(line) or ends_description(line):
                break
            lines.append(cursor.advance())
        return "\n".join(lines)

    def _read_sections(self) -> ParseOutcome:
        cursor = self._cursor
        separated = cursor.skip_blank() > 0
        if cursor.at_end():
            return self._parsed()

        if is_constraint_like(cursor.peek()):
            constraints = self._read_constraints()
            if constraints:
                self._commit(constraints=constraints)
            separated = cursor.skip_blank() > 0
            if cursor.at_end():
                return self._parsed()

        line = cursor.peek()
        if is_tasks_heading(line) or is_task_like(line):
            halted = self._read_tasks()
            if halted is not None:
                return halted
            separated = cursor.skip_blank() > 0
            if cursor.at_end():
                return self._parsed()

        return self._finish(separated=separated)

    def _read_constraints(self) -> tuple[Constraint, ...]:
        cursor = self._cursor
        kept: list[Constraint] = []
        while not cursor.at_end() and is_constraint_like(cursor.peek()):
            lineno = cursor.lineno
            m = CONSTRAINT_RE.match(cursor.advance())
            if m is None:
                logger.debug("Dropping malformed constraint", extra={"at_line": lineno})
                continue
            kept.append(Constraint(key=m.group("key"), value=m.group("value")))
        return tuple(kept)

    def _read_tasks(self) -> Halted | None:
        cursor = self._cursor
        if is_tasks_heading(cursor.peek()):
            cursor.advance()

        entries: list[tuple[int, bool, str]] = []
        while not cursor.at_end() and not is_blank(cursor.peek()):
            m = TASK_RE.match(cursor.peek())
            if m is None:
                return self._halt(HaltReason.MALFORMED_TASK)
            entries.append((len(m.group("indent")), m.group("mark") == "x", m.group("text")))
            if len(entries) > self._limits.max_task_count:
                return self._halt(HaltReason.TASK_LIMIT)
            cursor.advance()

        self._commit(
            tasks=build_task_tree(entries),
            constraints=self._committed.constraints or (),
        )
        return None

    def _finish(self, *, separated: bool) -> ParseOutcome:
        """Accept a trailing directive, or halt on any other leftover content."""

        cursor = self._cursor
        m = DIRECTIVE_RE.match(cursor.peek())
        if separated and m is not None and cursor.remaining() == 1:
            self._commit(directive=m.group("text"))
            return self._parsed()
        return self._halt(HaltReason.TRAILING_CONTENT)


class StageParser:
    """Parses plan text into a `ParseOutcome`. Never raises on malformed text."""

    def __init__(self, limits: ParserLimits | None = None) -> None:
        self._limits = limits or DEFAULT_LIMITS

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> StageParser:
        """Build a parser with the limits from `PLANCOMMIT_*` settings."""

        return cls((settings or load_settings()).limits())

    @property
    def limits(self) -> ParserLimits:
        return self._limits

    def parse(self, text: str) -> ParseOutcome:
        if not text.strip():
            return Empty()
        if len(text) > self._limits.max_input_length or "\x00" in text:
            logger.debug("Rejecting plan input", extra={"length": len(text)})
            return Halted.of(None, HaltReason.INPUT_REJECTED)

        lines = text.replace("\r\n", "\n").split("\n")
        header = self._parse_header(lines[0])
        if header is None:
            return Unknown()

        if header.title is not None and len(header.title) > self._limits.max_title_length:
            return Halted.of(Plan(header=header.without_title()), HaltReason.TITLE_TOO_LONG, line=1)

        body = lines[1:]
        while body and is_blank(body[-1]):
            body.pop()
        return _DocumentMachine(header, body, self._limits).run()

    @staticmethod
    def _parse_header(line: str) -> Header | None:
        m = HEADER_RE.match(line)
        if m is None:
            return None

        scope = m.group("scope")
        rest = m.group("rest")
        title: str | None = None
        # Without a scope, text after the colon is ignored rather than read as a title.
        if scope is not None:
            if rest.startswith(" "):
                title = rest[1:] or None
            elif rest:
                return None

        return Header(
            type=m.group("type"),
            scope=scope,
            breaking=m.group("breaking") is not None,
            title=title,
        )


def parse(text: str, limits: ParserLimits | None = None) -> ParseOutcome:
    """Parse plan text.

    Args:
        text: Raw commit description.
        limits: Optional size limits; defaults to the wire-contract limits.

    Returns:
        `Empty`, `Unknown`, `Parsed` or `Halted`.
    """

    return StageParser(limits).parse(text)
