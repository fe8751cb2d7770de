from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class LoggingConfig(BaseSettings):
    """Configuration for logging."""

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    log_file_path: Optional[Path] = None


class LookupConfig(BaseSettings):
    """Timing settings for safe element lookups."""

    default_timeout_seconds: float = 0.0  # 0 = try exactly once
    poll_interval_seconds: float = 0.0  # 0 = poll back-to-back

    @field_validator("default_timeout_seconds", "poll_interval_seconds")
    @classmethod
    def must_not_be_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("must be greater than or equal to 0")
        return v


class AppConfig(BaseSettings):
    """Root configuration class for safe_find."""

    logging: LoggingConfig = LoggingConfig()
    lookup: LookupConfig = LookupConfig()

    model_config = SettingsConfigDict(
        env_prefix="SAFE_FIND_",
        env_file=".env",
        env_nested_delimiter="__",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instantiate the main config object
config = AppConfig()
