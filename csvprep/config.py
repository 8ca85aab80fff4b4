"""Runtime settings using pydantic-settings, plus logging setup."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from .rules import DEFAULT_DEDUP_CAPACITY, PROGRESS_INTERVAL

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class PipelineSettings(BaseSettings):
    """Process-level knobs that are not part of a single run's configuration."""

    model_config = {"env_prefix": "CSVPREP_"}

    log_level: str = "INFO"
    progress_interval: int = Field(default=PROGRESS_INTERVAL, gt=0)
    dedup_capacity: int = Field(default=DEFAULT_DEDUP_CAPACITY, ge=0)  # used when max_lines is 0
    max_upload_bytes: int = Field(default=50 * 1024 * 1024, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> PipelineSettings:
    return PipelineSettings()


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging once.

    Falls back to ``CSVPREP_LOG_LEVEL`` (through the settings) if `level` is None.
    """
    lvl = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, lvl, logging.INFO), format=_DEFAULT_FORMAT)
