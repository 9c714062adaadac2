"""
Central configuration for the Sheldon client, sourced from SHELDON_* environment variables.
"""
from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HOST = "http://sheldon.staging.moviepilot.com:2311"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHELDON_", validate_assignment=True)

    host: str = DEFAULT_HOST
    log: bool = False
    slow_request_threshold: float = 1.0
    timeout: float = 10.0

    @field_validator("host")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
