"""Pipeline configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `PLANCOMMIT_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Wire contract defaults. Changing any of these changes which documents are accepted.
DEFAULT_MAX_INPUT_LENGTH = 100_000
DEFAULT_MAX_TITLE_LENGTH = 120
DEFAULT_MAX_NESTING_DEPTH = 4
DEFAULT_MAX_TASK_COUNT = 1000


class ParserLimits(BaseModel):
    """Size limits shared by the parser and the validator."""

    model_config = ConfigDict(frozen=True)

    max_input_length: int = Field(default=DEFAULT_MAX_INPUT_LENGTH, gt=0)
    max_title_length: int = Field(default=DEFAULT_MAX_TITLE_LENGTH, gt=0)
    max_nesting_depth: int = Field(default=DEFAULT_MAX_NESTING_DEPTH, ge=1)
    max_task_count: int = Field(default=DEFAULT_MAX_TASK_COUNT, gt=0)


DEFAULT_LIMITS = ParserLimits()


class Settings(BaseSettings):
    """plancommit settings.

    All fields are environment-configurable. Prefix is `PLANCOMMIT_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="PLANCOMMIT_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # Grammar limits
    max_input_length: int = Field(default=DEFAULT_MAX_INPUT_LENGTH, ge=1, le=10_000_000)
    max_title_length: int = Field(default=DEFAULT_MAX_TITLE_LENGTH, ge=1, le=1000)
    max_nesting_depth: int = Field(default=DEFAULT_MAX_NESTING_DEPTH, ge=1, le=32)
    max_task_count: int = Field(default=DEFAULT_MAX_TASK_COUNT, ge=1, le=100_000)

    def limits(self) -> ParserLimits:
        """Build the parser limits described by these settings."""

        return ParserLimits(
            max_input_length=self.max_input_length,
            max_title_length=self.max_title_length,
            max_nesting_depth=self.max_nesting_depth,
            max_task_count=self.max_task_count,
        )


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("PLANCOMMIT_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
