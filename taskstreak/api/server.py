"""FastAPI application setup"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskstreak import config
from taskstreak.api.routes import router
from taskstreak.api.middleware import setup_cors, setup_rate_limiting
from taskstreak.exceptions import TaskStreakError, ValidationError, RecordNotFoundError
from taskstreak.services.container import ServiceContainer
from taskstreak.store import create_store

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)


def build_container() -> ServiceContainer:
    """Container for the configured storage backend"""
    config.validate_config()
    return ServiceContainer(
        store=create_store(),
        streak_mode=config.STREAK_MODE,
        seed_defaults=config.SEED_DEFAULT_TASKS
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application"""
    # Startup
    logger.info("Starting API server...")
    await app.state.container.startup()
    logger.info("Store ready")

    yield

    # Shutdown
    logger.info("Shutting down API server...")
    await app.state.container.shutdown()
    logger.info("Store closed")


def create_api_application(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        container: Services to serve; built from configuration when omitted
    """
    app = FastAPI(
        title="TaskStreak API",
        description="Daily task tracking with streaks and completion statistics",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.container = container or build_container()

    # Setup middleware
    setup_cors(app, config.CORS_ORIGINS)
    setup_rate_limiting(app, config.RATE_LIMIT)

    # Include routes
    app.include_router(router)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request to {request.url.path}: {len(exc.errors())} validation errors")
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request data", "details": jsonable_encoder(exc.errors())}
        )

    @app.exception_handler(TaskStreakError)
    async def taskstreak_error_handler(request: Request, exc: TaskStreakError):
        if isinstance(exc, ValidationError):
            status_code = 400
        elif isinstance(exc, RecordNotFoundError):
            status_code = 404
        else:
            status_code = 500
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"}
        )

    logger.info("FastAPI application created")

    return app
