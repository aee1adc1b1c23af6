from __future__ import annotations

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BANK_URL = "https://raw.githubusercontent.com/landy8697/open-scioly-fermi/master/data.js"


class Settings(BaseSettings):
    """Quiz settings from FERMI_* environment variables (or a .env file)."""

    model_config = SettingsConfigDict(env_prefix="FERMI_", env_file=".env", case_sensitive=False)

    bank_url: str = DEFAULT_BANK_URL
    timeout: float = 10.0
    shuffle: bool = True
    seed: Optional[int] = None
    log_level: str = "INFO"

    @field_validator("seed", mode="before")
    @classmethod
    def _blank_seed_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"unknown log level {v!r}")
        return v


def get_settings() -> Settings:
    # Not cached: tests change the environment between calls
    return Settings()
