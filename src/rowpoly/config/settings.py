"""Application settings."""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RowpolySettings(BaseSettings):
    """Inference and logging settings, read from ROWPOLY_* variables or .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ROWPOLY_",
        case_sensitive=False,
        extra="ignore",
    )

    log_filter: str = Field(default="info")
    trace: bool = Field(default=False)
    fresh_type_prefix: str = Field(default="a", min_length=1, max_length=1)
    fresh_row_prefix: str = Field(default="r", min_length=1, max_length=1)


def load_settings(**overrides: Any) -> RowpolySettings:
    """Load settings, letting explicit keyword overrides beat the environment."""
    return RowpolySettings(**{k: v for k, v in overrides.items() if v is not None})
