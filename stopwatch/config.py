from __future__ import annotations

"""Runtime settings, overridable through ``STOPWATCH_*`` environment variables."""

import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stopwatch.core.lifecycle import DEFAULT_BACKGROUND_DELAY_MS


DEFAULT_TICK_INTERVAL_MS = 10
ENV_PREFIX = "STOPWATCH_"


def default_db_path() -> Path:
    """SQLite file in the current directory."""
    return Path.cwd() / "stopwatch.db"


class StopwatchConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    db_path: Path = Field(default_factory=default_db_path)
    background_delay_ms: int = Field(default=DEFAULT_BACKGROUND_DELAY_MS, ge=0)
    tick_interval_ms: int = Field(default=DEFAULT_TICK_INTERVAL_MS, gt=0)
    log_level: str = "INFO"

    @field_validator("db_path")
    @classmethod
    def _expand_db_path(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StopwatchConfig:
        if environ is None:
            environ = os.environ
        values: dict[str, Any] = {}
        env_names = {
            "db_path": "DB_PATH",
            "background_delay_ms": "BACKGROUND_DELAY_MS",
            "tick_interval_ms": "TICK_MS",
            "log_level": "LOG_LEVEL",
        }
        for field_name, suffix in env_names.items():
            raw = environ.get(ENV_PREFIX + suffix)
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()
        return cls.model_validate(values)
