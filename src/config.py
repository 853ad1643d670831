from __future__ import annotations

import logging
from functools import cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AppSettings(BaseSettings):
    default_coin: str = "DOT"
    default_input_format: str = "subscan"
    default_output_format: str = "bitcointax"
    default_quarter: str = "all"
    default_currency: str = "USD"
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="TAXMAT_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r} (expected one of {', '.join(LOG_LEVELS)})")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


@cache
def config() -> AppSettings:
    return AppSettings()
