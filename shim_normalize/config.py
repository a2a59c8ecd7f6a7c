"""Runtime settings for the mapping framework."""

import logging
import os

from pydantic import BaseModel, Field, field_validator


class MappingSettings(BaseModel):
    """
    Mapping settings.

    Attributes:
        log_skipped_records: Log every record that does not produce a data point
        skip_log_level: Log level used for skipped records
    """

    log_skipped_records: bool = True
    skip_log_level: int = Field(logging.DEBUG)

    @field_validator("skip_log_level", mode="before")
    @classmethod
    def parse_level(cls, v: object) -> int:
        """Accept level names ("INFO") as well as numbers."""
        if isinstance(v, str):
            if v.strip().isdigit():
                return int(v)
            level = logging.getLevelName(v.strip().upper())
            if not isinstance(level, int):
                raise ValueError(f"Unknown log level: {v}")
            return level
        return v

    @classmethod
    def from_env(cls) -> "MappingSettings":
        """Load settings from SHIM_NORMALIZE_* environment variables."""
        return cls(
            log_skipped_records=os.getenv("SHIM_NORMALIZE_LOG_SKIPPED", "true").lower()
            in ("true", "1", "yes"),
            skip_log_level=os.getenv("SHIM_NORMALIZE_SKIP_LOG_LEVEL", "DEBUG"),
        )
