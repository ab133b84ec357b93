from __future__ import annotations

from typing import List

from pydantic_settings import SettingsConfigDict

from core.settings.base_settings import StorefrontBaseSettings


class ApiSettings(StorefrontBaseSettings):
    """HTTP API settings. Loaded from API_* variables."""

    model_config = SettingsConfigDict(env_prefix="API_")

    title: str = "Storefront API"
    version: str = "1.0.0"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
