"""Parse outcome variants."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from plancommit.models.plan import Plan


class HaltReason(str, Enum):
    """Why parsing stopped before the end of the text."""

    INPUT_REJECTED = "input_rejected"
    TITLE_TOO_LONG = "title_too_long"
    MISSING_SEPARATOR = "missing_separator"
    UNEXPECTED_CONTENT = "unexpected_content"
    MISSING_DESCRIPTION = "missing_description"
    MALFORMED_TASK = "malformed_task"
    TASK_LIMIT = "task_limit"
    TRAILING_CONTENT = "trailing_content"


class Empty(BaseModel):
    """Input was empty or whitespace only."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"

    @property
    def stage(self) -> int:
        return 0


class Unknown(BaseModel):
    """Input does not start with a recognizable header."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unknown"] = "unknown"

    @property
    def stage(self) -> int:
        return 0


class Parsed(BaseModel):
    """The whole text matched the grammar."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["parsed"] = "parsed"
    stage: int = Field(ge=1, le=5)
    plan: Plan

    @model_validator(mode="after")
    def _stage_matches_plan(self) -> Parsed:
        if self.stage != self.plan.stage:
            raise ValueError(f"stage {self.stage} does not match plan stage {self.plan.stage}")
        return self

    @classmethod
    def of(cls, plan: Plan) -> Parsed:
        return cls(stage=plan.stage, plan=plan)


class Halted(BaseModel):
    """The grammar matched up to `stage`, then hit a malformed boundary.

    `plan` only carries confirmed sections. `line` is the 1-based line where parsing stopped.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["halted"] = "halted"
    stage: int = Field(ge=0, le=5)
    plan: Plan | None = None
    reason: HaltReason
    line: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def _stage_matches_plan(self) -> Halted:
        if self.plan is None:
            if self.stage != 0:
                raise ValueError("a halted outcome past stage 0 needs a plan")
        elif self.stage != self.plan.stage:
            raise ValueError(f"stage {self.stage} does not match plan stage {self.plan.stage}")
        return self

    @classmethod
    def of(cls, plan: Plan | None, reason: HaltReason, line: int | None = None) -> Halted:
        return cls(stage=plan.stage if plan is not None else 0, plan=plan, reason=reason, line=line)


ParseOutcome = Empty | Unknown | Parsed | Halted
