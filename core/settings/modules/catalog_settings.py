from __future__ import annotations

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from core.domain.value_objects import DEFAULT_PAGE_SIZE
from core.settings.base_settings import StorefrontBaseSettings


class CatalogSettings(StorefrontBaseSettings):
    """Catalog paging defaults. Loaded from CATALOG_* variables."""

    model_config = SettingsConfigDict(env_prefix="CATALOG_")

    default_page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    recent_products_count: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
