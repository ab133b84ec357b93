"""FastAPI application main entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.api.v1.endpoints import cart, categories, colors, products, users
from core.application.interfaces import IClock, IHashFunction
from core.domain.exceptions import (
    NotFoundError,
    StorageFaultError,
    TransactionFailureError,
    ValidationFailureError,
)
from core.infrastructure.clock import SystemClock
from core.infrastructure.database.lifecycle import close_database, get_session_factory, init_database
from core.infrastructure.logging import configure_logging
from core.infrastructure.security import Pbkdf2HashFunction
from core.settings import AppSettings, get_app_settings


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    hash_function: Optional[IHashFunction] = None,
    clock: Optional[IClock] = None,
) -> FastAPI:
    """Build the API application.

    Args:
        settings: Application settings (defaults to environment/.env)
        hash_function: Password hasher (defaults to PBKDF2)
        clock: Timestamp source (defaults to system UTC clock)

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_app_settings()
    configure_logging(settings.api.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await init_database(settings.database)
        app.state.session_factory = get_session_factory()
        try:
            yield
        finally:
            await close_database()

    app = FastAPI(
        title=settings.api.title,
        description="Storefront catalog, account and shopping cart API",
        version=settings.api.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.hash_function = hash_function or Pbkdf2HashFunction()
    app.state.clock = clock or SystemClock()

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(products.router, prefix="/api/v1")
    app.include_router(categories.router, prefix="/api/v1")
    app.include_router(colors.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(cart.router, prefix="/api/v1")

    _register_exception_handlers(app)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint.

        Returns:
            Health status
        """
        return {"status": "healthy"}

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ValidationFailureError)
    async def validation_failure_handler(
        request: Request, exc: ValidationFailureError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(TransactionFailureError)
    async def transaction_failure_handler(
        request: Request, exc: TransactionFailureError
    ) -> JSONResponse:
        """Lost insert races are retryable (409); anything else is a server error."""
        if exc.retryable:
            return JSONResponse(
                status_code=status.HTTP_409_CONFLICT,
                content={"detail": str(exc.cause), "retryable": True},
            )
        logger.error(f"{exc} (cause: {exc.cause!r})")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "retryable": False},
        )

    @app.exception_handler(StorageFaultError)
    async def storage_fault_handler(request: Request, exc: StorageFaultError) -> JSONResponse:
        logger.error(f"Storage unavailable: {exc}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage temporarily unavailable"},
        )


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
