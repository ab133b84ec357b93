# Settings modules
from .api_settings import ApiSettings
from .app_settings import AppSettings, get_app_settings
from .catalog_settings import CatalogSettings
from .database_settings import DatabaseSettings

__all__ = [
    "ApiSettings",
    "AppSettings",
    "CatalogSettings",
    "DatabaseSettings",
    "get_app_settings",
]
