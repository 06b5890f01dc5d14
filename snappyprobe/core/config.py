"""Probe settings with Pydantic validation and environment loading."""

from __future__ import annotations

import logging
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Directory name used under the system temp dir when no target is configured.
DEFAULT_DIR_NAME = "LevelDbSnappyTest"


class ProbeSettings(BaseSettings):
    """Settings loaded from SNAPPYPROBE_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SNAPPYPROBE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    expect_snappy: bool = Field(
        default=True,
        description="Whether the LevelDB build is expected to read Snappy blocks",
    )
    target_dir: Optional[Path] = Field(
        default=None,
        description="Directory the fixture database is rebuilt in (default: temp dir)",
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    log_format: Literal["text", "json"] = Field(
        default="text", description="Log output format: text or json"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def resolved_target_dir(self) -> Path:
        if self.target_dir is not None:
            return self.target_dir
        return default_target_dir()


def default_target_dir() -> Path:
    return Path(tempfile.gettempdir()) / DEFAULT_DIR_NAME


@lru_cache
def get_settings() -> ProbeSettings:
    """Get cached settings instance."""
    return ProbeSettings()

