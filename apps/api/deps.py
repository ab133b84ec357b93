"""FastAPI dependencies for dependency injection."""

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.application.interfaces import IClock, IHashFunction
from core.application.services import (
    CartApplicationService,
    CatalogApplicationService,
    UserApplicationService,
)
from core.settings import AppSettings


def get_settings(request: Request) -> AppSettings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory opened by the application lifespan.

    Returns:
        async_sessionmaker instance
    """
    return request.app.state.session_factory


def get_hash_function(request: Request) -> IHashFunction:
    return request.app.state.hash_function


def get_clock(request: Request) -> IClock:
    return request.app.state.clock


def get_catalog_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    settings: AppSettings = Depends(get_settings),
) -> CatalogApplicationService:
    """Get CatalogApplicationService instance."""
    return CatalogApplicationService(
        session_factory,
        recent_products_count=settings.catalog.recent_products_count,
    )


def get_user_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    hash_function: IHashFunction = Depends(get_hash_function),
    clock: IClock = Depends(get_clock),
) -> UserApplicationService:
    """Get UserApplicationService instance."""
    return UserApplicationService(session_factory, hash_function, clock)


def get_cart_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    clock: IClock = Depends(get_clock),
) -> CartApplicationService:
    """Get CartApplicationService instance."""
    return CartApplicationService(session_factory, clock)


def get_current_business_entity_id(
    current_business_entity_id: int = Header(..., alias="X-Business-Entity-Id", gt=0),
) -> int:
    """Current user, as resolved by the authentication layer in front of this API."""
    return current_business_entity_id
