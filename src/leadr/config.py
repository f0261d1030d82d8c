"""
SDK settings, read from keyword arguments or ``LEADR_*`` environment variables.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from leadr.transport.http import DEFAULT_BASE_URL


class LeadrSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LEADR_", extra="ignore")

    game_id: str = Field(..., description="LEADR game id from the dashboard.")
    base_url: str = Field(DEFAULT_BASE_URL, description="Only change for self-hosted instances.")
    debug_logging: bool = Field(False, description="Log requests and auth events. Tokens are never logged.")
    timeout: float = Field(30.0, gt=0)
    credentials_path: Optional[Path] = Field(
        None,
        description="Where tokens and the device fingerprint are stored. Defaults to ~/.leadr/credentials.json.",
    )

    @field_validator("game_id")
    @classmethod
    def _game_id_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("game_id is required")
        return value

    @field_validator("base_url")
    @classmethod
    def _base_url_default(cls, value: str) -> str:
        return value.strip() or DEFAULT_BASE_URL
