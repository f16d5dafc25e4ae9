"""
Restaurant POS API - Main Application.

FastAPI application with CORS enabled for the register frontend, and the
mapping from domain errors to HTTP responses.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import __version__
from api.dependencies import Services, build_services
from api.settings import Settings, configure_logging, load_settings
from domain.errors import (
    AuthorizationError,
    NotFoundError,
    PosError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (AuthorizationError, 403),
    (StorageError, 500),
)


def _status_for(exc: PosError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


async def handle_pos_error(request: Request, exc: PosError) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        # Storage details stay in the logs.
        detail = "Internal server error"
    else:
        detail = exc.message
    return JSONResponse(status_code=status, content={"error": exc.code, "detail": detail})


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and parameters get the same 400 shape as ValidationError."""

    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=400,
        content={"error": ValidationError.code, "detail": "; ".join(problems) or "Invalid request"},
    )


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    """
    Build the application.

    Tests pass `services` built on in-memory repositories; production reads
    settings from the environment and wires the configured backend.
    """

    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Restaurant POS API",
        description="REST API for recording restaurant sales and reporting on them",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Configure CORS - Allow all origins for the in-store register
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.services = services if services is not None else build_services(settings)
    app.add_exception_handler(PosError, handle_pos_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)

    @app.get("/health", tags=["Health"])
    def health_check():
        """
        Health check endpoint.

        Returns the API status and version.
        """
        return {
            "status": "healthy",
            "version": __version__,
            "service": "restaurant-pos-api"
        }

    @app.get("/", tags=["Root"])
    def root():
        """
        Root endpoint with API information.
        """
        return {
            "message": "Restaurant POS API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    # Import and include routers
    from api.routers import products, reports, sales

    app.include_router(products.router, prefix="/api/v1", tags=["Products"])
    app.include_router(sales.router, prefix="/api/v1", tags=["Sales"])
    app.include_router(reports.router, prefix="/api/v1", tags=["Reports"])

    return app
