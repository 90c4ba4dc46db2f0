"""Application configuration loaded from the environment."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .store import DEFAULT_OUTPUT_DIRNAME, DEFAULT_PATTERN


class ConfigError(RuntimeError):
    """Raised when the environment configuration is invalid."""


class Settings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    log_dir: str = Field("logs", alias="LEDGER_LOG_DIR")
    output_dirname: str = Field(DEFAULT_OUTPUT_DIRNAME, alias="LEDGER_OUTPUT_DIR")
    log_pattern: str = Field(DEFAULT_PATTERN, alias="LEDGER_LOG_PATTERN")
    parse_workers: int = Field(1, alias="LEDGER_PARSE_WORKERS")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("log_dir", "log_pattern")
    @classmethod
    def non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("output_dirname")
    @classmethod
    def validate_output_dirname(cls, value: str) -> str:
        if not value or value in {".", ".."} or "/" in value or "\\" in value:
            raise ValueError("LEDGER_OUTPUT_DIR must be a single directory name")
        return value

    @field_validator("parse_workers")
    @classmethod
    def validate_workers(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("LEDGER_PARSE_WORKERS must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown LOG_LEVEL {value!r}")
        return level


def load_settings() -> Settings:
    env_values = {
        field.alias: os.environ[field.alias]
        for field in Settings.model_fields.values()
        if field.alias and os.environ.get(field.alias)
    }
    try:
        return Settings(**env_values)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def reset_settings_cache() -> None:
    get_settings.cache_clear()  # type: ignore[attr-defined]


def is_environment_valid() -> tuple[bool, Optional[str]]:
    try:
        reset_settings_cache()
        get_settings()
    except ConfigError as exc:
        return False, str(exc)
    return True, None
