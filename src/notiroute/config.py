"""
Environment-based settings for notiroute.

Uses pydantic-settings to load values from environment variables and
``.env`` files.  These are the process-level knobs; the channel/scope/alert
graph itself is built in code through :func:`notiroute.configure`.

All environment variables are prefixed with ``NOTIROUTE_`` to avoid
collisions.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings loaded from ``NOTIROUTE_``-prefixed environment variables.

    Attributes:
        default_value: Global payload default copied into each alert's
            ``_any_`` default when the alert is declared.
        default_group: Group tag given to channels registered without one,
            and the initial target of every notifier.
        check_constructor: Whether scopes check their payload class for
            alert-named constructors unless they say otherwise.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render logs as JSON instead of the console format.
    """

    model_config = SettingsConfigDict(
        env_prefix="NOTIROUTE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Routing ──
    default_value: str | None = Field(
        default=None,
        description="Global payload default for every alert.",
    )
    default_group: str = Field(
        default="default",
        min_length=1,
        description="Group tag for channels registered without one.",
    )
    check_constructor: bool = Field(
        default=False,
        description="Default constructor-check flag for scopes.",
    )

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=False, description="Emit JSON log lines.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings singleton."""
    return Settings()
