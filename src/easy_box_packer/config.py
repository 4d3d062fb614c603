"""Settings read from the environment; a local .env is loaded via python-dotenv."""

from __future__ import annotations

import os
from typing import Any, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from easy_box_packer.errors import InvalidInput

ENV_PREFIX = "EASY_BOX_PACKER_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Runtime knobs. Each field maps to EASY_BOX_PACKER_<FIELD NAME>."""

    log_level: str = Field(default="WARNING", description="Level used by the command line")
    limit_search_count: int = Field(
        default=5,
        ge=1,
        description="Validated shapes examined by find_smallest_container_with_limits")
    benchmark_items: int = Field(default=5000, ge=1, description="Items packed by the benchmark")
    benchmark_seed: Optional[int] = Field(default=None, description="Seed for benchmark items")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'. Valid: {list(LOG_LEVELS)}")
        return level


def get_settings() -> Settings:
    """Build settings from the environment at call time. Existing variables win over .env."""
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)

    raw: dict[str, Any] = {}
    for name in Settings.model_fields:
        value = os.getenv(ENV_PREFIX + name.upper())
        if value:
            raw[name] = value

    try:
        return Settings(**raw)
    except ValidationError as exc:
        raise InvalidInput(f"Invalid {ENV_PREFIX}* setting: {exc}") from exc
