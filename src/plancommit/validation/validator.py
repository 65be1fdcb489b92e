"""Semantic validation of parse outcomes.

Validation classifies, it never repairs: a parsed plan either satisfies every rule and
comes back as a narrower-typed `ValidatedPlan`, or every broken rule is reported at once
as a field-scoped `ValidationIssue`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plancommit.config import DEFAULT_LIMITS, ParserLimits
from plancommit.logging import get_logger
from plancommit.models.outcome import Empty, Halted, HaltReason, ParseOutcome, Unknown
from plancommit.validation.schema import ValidatedPlan

logger = get_logger(__name__)


class ValidationIssue(BaseModel):
    """A single machine-readable validation finding."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    code: str


class Valid(BaseModel):
    """Outcome whose plan satisfies every validation rule."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["valid"] = "valid"
    state: Literal["parsed", "halted", "empty"]
    stage: int = Field(ge=0, le=5)
    plan: ValidatedPlan | None = None
    reason: HaltReason | None = None

    @property
    def is_valid(self) -> bool:
        return True


class Invalid(BaseModel):
    """Outcome that broke one or more rules."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["invalid"] = "invalid"
    errors: tuple[ValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return False


ValidationReport = Valid | Invalid


def _issues_from(exc: ValidationError) -> tuple[ValidationIssue, ...]:
    return tuple(
        ValidationIssue(
            field=".".join(str(part) for part in err["loc"]) or "root",
            message=err["msg"],
            code=err["type"].upper(),
        )
        for err in exc.errors()
    )


def validate(outcome: ParseOutcome, limits: ParserLimits | None = None) -> ValidationReport:
    """Check a parse outcome against the format's semantic rules.

    Args:
        outcome: Result of `parse`.
        limits: Optional limits; defaults to the wire-contract limits.

    Returns:
        `Valid` with a `ValidatedPlan`, or `Invalid` listing every finding.
    """

    if isinstance(outcome, Empty):
        return Valid(state="empty", stage=0)

    if isinstance(outcome, Unknown) or outcome.plan is None:
        return Invalid(
            errors=(
                ValidationIssue(
                    field="header",
                    message="Header is required for plan documents",
                    code="MISSING_HEADER",
                ),
            )
        )

    try:
        plan = ValidatedPlan.model_validate(
            outcome.plan.model_dump(),
            context={"limits": limits or DEFAULT_LIMITS},
        )
    except ValidationError as exc:
        issues = _issues_from(exc)
        logger.debug("Plan failed validation", extra={"issue_count": len(issues)})
        return Invalid(errors=issues)

    reason = outcome.reason if isinstance(outcome, Halted) else None
    return Valid(state=outcome.kind, stage=outcome.stage, plan=plan, reason=reason)


def is_valid_outcome(outcome: ParseOutcome, limits: ParserLimits | None = None) -> bool:
    return validate(outcome, limits).is_valid
