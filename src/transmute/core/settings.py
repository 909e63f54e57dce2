"""Settings for applications embedding transmute.

The library itself needs very little configuration: transformers are plain
values built in code. What is configurable is how the library reports
itself, i.e. log level, output format and the service name stamped on
every log line.

Features:
    - **TransmuteSettings:** log_level, log_json, service
    - **env_prefix:** ``TRANSMUTE_`` environment variables
    - **.env file support:** Automatic loading via pydantic-settings
    - **Extra ignore:** Unknown env vars don't cause startup failures

Examples:
    >>> from transmute.core.settings import get_settings
    >>> from transmute.core.logging import configure_from_settings
    >>> configure_from_settings(get_settings())

Tags:
    settings, configuration, pydantic, environment, transmute
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TransmuteSettings(BaseSettings):
    """Settings read from ``TRANSMUTE_*`` environment variables.

    Fields
    ──────
    log_level : Structlog log level
    log_json  : JSON output when true, console when false, TTY auto-detect when unset
    service   : Value of ``service.name`` in every log line
    """

    model_config = SettingsConfigDict(
        env_prefix="TRANSMUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_json: bool | None = None
    service: str = Field(default="transmute", min_length=1)

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> TransmuteSettings:
    """Return the process-wide settings, read once from the environment."""
    return TransmuteSettings()


__all__ = ["TransmuteSettings", "get_settings"]
