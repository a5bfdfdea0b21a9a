"""
Retail POS - Backend API
Order and inventory engine for retail shops
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from retail_pos.api import auth, orders, products, shops
from retail_pos.context import PosContext
from retail_pos.core.config import Settings, get_settings
from retail_pos.core.errors import (
    InsufficientStock, InvalidCredentials, NotAuthenticated, NotFound,
    PermissionDenied, PosError, TransportFailure, ValidationError,
)
from retail_pos.core.logging_config import configure_logging

logger = logging.getLogger(__name__)

# Error kind -> HTTP status; anything else is a 500
ERROR_STATUS = (
    (ValidationError, 400),
    (NotFound, 404),
    (InsufficientStock, 409),
    (InvalidCredentials, 401),
    (NotAuthenticated, 401),
    (PermissionDenied, 403),
    (TransportFailure, 502),
)


def status_for(error: PosError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return 500


def create_app(settings: Optional[Settings] = None, context: Optional[PosContext] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Configuration (read from the environment when omitted)
        context: Pre-built engine context; tests pass one to control the data source
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        pos = context or PosContext(settings)
        await pos.startup()
        app.state.context = pos
        yield
        await pos.shutdown()

    app = FastAPI(
        title=settings.API_TITLE,
        version=settings.API_VERSION,
        description=settings.API_DESCRIPTION,
        debug=settings.API_DEBUG,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    @app.exception_handler(PosError)
    async def pos_error_handler(request: Request, exc: PosError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={
                "status": "error",
                "error": type(exc).__name__,
                "detail": exc.message or str(exc)
            }
        )

    # Include API routers
    app.include_router(auth.router, prefix="/api/v1/auth", tags=["Auth"])
    app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
    app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
    app.include_router(shops.router, prefix="/api/v1/shops", tags=["Shops"])

    @app.get("/")
    async def root():
        """Root endpoint - API status"""
        return {
            "message": "Retail POS API",
            "status": "online",
            "version": settings.API_VERSION,
            "description": settings.API_DESCRIPTION
        }

    @app.get("/health")
    async def health(request: Request):
        """Health check - data source readiness and pending writes"""
        pos: PosContext = request.app.state.context
        ready = pos.data_service.is_ready
        return {
            "status": "healthy" if ready else "starting",
            "service": "retail-pos-api",
            "version": settings.API_VERSION,
            "data_source": {
                "type": pos.data_service.source.name,
                "ready": ready,
                "pending_writes": pos.persistence.pending_count,
                "failed_writes": pos.persistence.failure_count
            }
        }

    return app


app = create_app()
