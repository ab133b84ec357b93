from pydantic_settings import BaseSettings, SettingsConfigDict


class StorefrontBaseSettings(BaseSettings):
    """Common loader options: environment first, then a local .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
