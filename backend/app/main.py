"""Prayer Times FastAPI Application.

Main entry point for the backend API server. Run with::

    uvicorn app.main:app --app-dir backend
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import router
from app.config import Settings
from app.models import ErrorCode, PrayerServiceError
from app.services import ServiceContainer, create_services

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


def create_app(
    settings: Settings | None = None,
    services: ServiceContainer | None = None,
) -> FastAPI:
    """Build the FastAPI app.

    Passing ``services`` skips building them from ``settings`` in the
    lifespan; tests use this to inject fakes.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        owned = getattr(app.state, "services", None) is None
        if owned:
            app.state.services = create_services(settings)
        yield
        # Shutdown
        if owned:
            await app.state.services.close()

    app = FastAPI(
        title="Prayer Times API",
        description="Islamic prayer times by city, with geocoding and caching",
        version="0.1.0",
        lifespan=lifespan,
    )
    if services is not None:
        app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle invalid query parameters."""
        return JSONResponse(
            status_code=422,
            content={
                "error": ErrorCode.VALIDATION_ERROR.value,
                "message": str(exc.errors()),
            },
        )

    @app.exception_handler(PrayerServiceError)
    async def service_exception_handler(request: Request, exc: PrayerServiceError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.code.value, "message": exc.message},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors."""
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "error": ErrorCode.INTERNAL_ERROR.value,
                "message": f"Internal Server Error: {exc}",
            },
        )

    app.include_router(router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


_settings = Settings.from_env()
configure_logging(_settings.log_level)
app = create_app(_settings)
