"""Read and write paths over the parse -> validate -> format pipeline."""

from __future__ import annotations

from plancommit.config import ParserLimits, Settings, load_settings
from plancommit.errors import PlanParseError, PlanValidationError
from plancommit.formatting.formatter import format_plan
from plancommit.grammar.parser import parse
from plancommit.logging import configure_logging, get_logger, source_context
from plancommit.models.outcome import Empty, Halted, Unknown
from plancommit.models.plan import Plan
from plancommit.validation.schema import ValidatedPlan
from plancommit.validation.validator import Invalid, validate

logger = get_logger(__name__)


def configure(settings: Settings | None = None) -> ParserLimits:
    """Set up logging from settings and return the limits they describe.

    Meant to be called once by the embedding application at startup; the read and
    write paths never configure logging themselves.
    """

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    limits = settings.limits()
    logger.debug("plancommit configured", extra=limits.model_dump())
    return limits


def normalize(text: str, limits: ParserLimits | None = None, *, source: str | None = None) -> str:
    """Rewrite text into canonical form.

    Halted documents keep their confirmed prefix; everything past the halt is dropped.

    Args:
        text: Raw commit description.
        limits: Optional limits, e.g. from `configure`.
        source: Identifier of the text (a revision id), bound to every log record.

    Raises:
        PlanParseError: The text has no recognizable header.
        PlanValidationError: The parsed plan breaks a validation rule.
    """

    with source_context(source=source, operation="normalize"):
        outcome = parse(text, limits)
        if isinstance(outcome, Empty):
            return ""
        if isinstance(outcome, Unknown) or outcome.plan is None:
            raise PlanParseError("text does not start with a plan header", outcome)

        report = validate(outcome, limits)
        if isinstance(report, Invalid):
            raise PlanValidationError(report.errors)
        if isinstance(outcome, Halted):
            logger.info(
                "Normalizing halted plan",
                extra={"stage": outcome.stage, "reason": outcome.reason.value},
            )
        return format_plan(report.plan, limits)  # type: ignore[arg-type]


def load_plan(
    text: str, limits: ParserLimits | None = None, *, source: str | None = None
) -> ValidatedPlan | None:
    """Parse and validate a complete plan.

    Returns:
        The validated plan, or None for empty text.

    Raises:
        PlanParseError: The text has no header or halted before its end.
        PlanValidationError: The plan breaks a validation rule.
    """

    with source_context(source=source, operation="load"):
        outcome = parse(text, limits)
        if isinstance(outcome, Empty):
            return None
        if isinstance(outcome, Unknown):
            raise PlanParseError("text does not start with a plan header", outcome)
        if isinstance(outcome, Halted):
            logger.info(
                "Refusing halted plan",
                extra={"stage": outcome.stage, "reason": outcome.reason.value},
            )
            raise PlanParseError(
                f"plan halted at stage {outcome.stage} ({outcome.reason.value}, line {outcome.line})",
                outcome,
            )

        report = validate(outcome, limits)
        if isinstance(report, Invalid):
            raise PlanValidationError(report.errors)
        return report.plan


def dump_plan(
    plan: Plan, limits: ParserLimits | None = None, *, source: str | None = None
) -> str:
    """Render a plan for the write path."""

    with source_context(source=source, operation="dump"):
        return format_plan(plan, limits)
