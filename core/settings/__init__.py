# Settings package
from core.settings.modules import (
    ApiSettings,
    AppSettings,
    CatalogSettings,
    DatabaseSettings,
    get_app_settings,
)

__all__ = ["get_app_settings", "AppSettings", "ApiSettings", "CatalogSettings", "DatabaseSettings"]
