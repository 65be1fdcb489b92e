"""Validated plan schemas.

Each schema narrows the matching model from `plancommit.models.plan` to the fixed
vocabularies and limits of the format. Limits come from the validation context
(`{"limits": ParserLimits}`) and fall back to the wire-contract defaults.
"""

from __future__ import annotations

from pydantic import ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from plancommit.config import DEFAULT_LIMITS, ParserLimits
from plancommit.grammar.patterns import DIRECTIVE_TEXT_RE, SCOPE_RE, CommitType, ConstraintKey
from plancommit.models.plan import Constraint, Header, Plan, Task, nesting_depth


def _limits(info: ValidationInfo) -> ParserLimits:
    context = info.context or {}
    return context.get("limits") or DEFAULT_LIMITS


class ValidatedHeader(Header):
    type: CommitType  # type: ignore[assignment]

    @field_validator("scope")
    @classmethod
    def _scope_pattern(cls, value: str | None) -> str | None:
        if value is not None and not SCOPE_RE.match(value):
            raise PydanticCustomError(
                "scope_pattern",
                "Scope must start with a letter and contain only lowercase letters, numbers, and hyphens",
            )
        return value

    @field_validator("title")
    @classmethod
    def _title_shape(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return value
        max_length = _limits(info).max_title_length
        if len(value) > max_length:
            raise PydanticCustomError(
                "title_too_long",
                "Title exceeds {max_length} characters",
                {"max_length": max_length},
            )
        if value != value.strip():
            raise PydanticCustomError(
                "title_whitespace",
                "Title should not have leading or trailing whitespace",
            )
        return value


class ValidatedConstraint(Constraint):
    key: ConstraintKey  # type: ignore[assignment]

    @field_validator("value")
    @classmethod
    def _value_shape(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("constraint_value_empty", "Constraint value cannot be empty")
        if value[0] != value[0].lower():
            raise PydanticCustomError(
                "constraint_value_case",
                "Constraint value should start with lowercase",
            )
        return value


class ValidatedTask(Task):
    children: tuple[ValidatedTask, ...] = ()  # type: ignore[assignment]

    @field_validator("text")
    @classmethod
    def _text_present(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("task_text_empty", "Task description must be a non-empty string")
        return value


class ValidatedPlan(Plan):
    header: ValidatedHeader  # type: ignore[assignment]
    constraints: tuple[ValidatedConstraint, ...] | None = None  # type: ignore[assignment]
    tasks: tuple[ValidatedTask, ...] | None = None  # type: ignore[assignment]

    @field_validator("tasks")
    @classmethod
    def _nesting_limit(
        cls, value: tuple[ValidatedTask, ...] | None, info: ValidationInfo
    ) -> tuple[ValidatedTask, ...] | None:
        if value is None:
            return value
        max_depth = _limits(info).max_nesting_depth
        if nesting_depth(value) > max_depth:
            raise PydanticCustomError(
                "task_depth_exceeded",
                "Task nesting exceeds maximum depth of {max_depth}",
                {"max_depth": max_depth},
            )
        return value

    @field_validator("directive")
    @classmethod
    def _directive_shape(cls, value: str | None) -> str | None:
        if value is not None and not DIRECTIVE_TEXT_RE.match(value):
            raise PydanticCustomError(
                "directive_format",
                "Directive must be uppercase words separated by single spaces",
            )
        return value
