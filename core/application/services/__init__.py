"""Application services."""
from .cart_service import CartApplicationService
from .catalog_service import CatalogApplicationService
from .user_service import UserApplicationService

__all__ = ["CartApplicationService", "CatalogApplicationService", "UserApplicationService"]
