"""
Type-safe configuration for the PAD compiler using Pydantic Settings.

Values load from ``PAD_*`` environment variables and a ``.env`` file.

Usage:
    from shared.config import config

    language = config.default_language
"""
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PadConfig(BaseSettings):
    """
    Central configuration for the PAD compiler.
    """
    model_config = SettingsConfigDict(
        env_prefix="PAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # ============================================================================
    # Logging
    # ============================================================================

    log_level: str = Field(default="WARNING", description="Level for every pad_compiler logger")

    # ============================================================================
    # Compilation
    # ============================================================================

    default_language: Literal["rust", "javascript"] = Field(
        default="rust",
        description="Source language used when a caller does not name one",
    )

    # ============================================================================
    # CLI Output
    # ============================================================================

    json_indent: Optional[int] = Field(
        default=None,
        ge=0,
        description="Indent for `pad transform` output; unset keeps the compact wire format",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return value.upper()


# ============================================================================
# Global Config Instance
# ============================================================================

config = PadConfig()
