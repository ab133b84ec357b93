from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.api_settings import ApiSettings
from core.settings.modules.catalog_settings import CatalogSettings
from core.settings.modules.database_settings import DatabaseSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    database: DatabaseSettings
    catalog: CatalogSettings
    api: ApiSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        database=DatabaseSettings(),
        catalog=CatalogSettings(),
        api=ApiSettings(),
    )
