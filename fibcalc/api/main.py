"""
FastAPI Application Setup

Main entry point for the fibcalc API application.

Responsibility:
    - FastAPI app initialization
    - Router registration (values)
    - CORS middleware configuration
    - Global exception handlers
    - Request logging middleware
    - Health check and service info endpoints
    - Startup: create durable table; shutdown: release Redis pool and engine

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from fibcalc import __version__
from fibcalc.api.routers import values
from fibcalc.api.schemas.common import ErrorResponse
from fibcalc.domain.shared.exceptions import (
    CacheWriteError,
    DomainException,
    PublishError,
    StoreWriteError,
    SubmissionError,
    ValidationError,
)
from fibcalc.infrastructure.persistence import database
from fibcalc.infrastructure.persistence.redis import connection as redis_connection
from fibcalc.shared.settings import get_settings

# Configure logger
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

SUBMISSION_ERROR_CODES = {
    StoreWriteError: "STORE_WRITE_FAILED",
    CacheWriteError: "CACHE_WRITE_FAILED",
    PublishError: "PUBLISH_FAILED",
}


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: "ok" if Redis and database answer, "degraded" otherwise
        version: API version
        timestamp: Unix timestamp of health check
        redis: Redis PING succeeded
        database: SELECT 1 succeeded
    """

    status: str = "ok"
    version: str = __version__
    timestamp: float
    redis: bool
    database: bool


class ServiceInfoResponse(BaseModel):
    service: str = "fibcalc"
    version: str = __version__
    docs: str = "/docs"


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Request logging middleware.

    Logs all incoming requests with method, path, status code, and duration.

    Logging Format:
        INFO: "Incoming request: POST /api/values"
        INFO: "Request completed: POST /api/values - 202 - 0.012s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )

    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Global exception handler for domain layer exceptions.

    Mapping:
        - ValidationError -> 422 INDEX_VALIDATION (nothing was written)
        - StoreWriteError -> 503 STORE_WRITE_FAILED
        - CacheWriteError -> 503 CACHE_WRITE_FAILED (durable row exists)
        - PublishError -> 503 PUBLISH_FAILED (durable row and pending entry exist)
        - Other DomainException -> 400 Bad Request

    Returns:
        JSONResponse with ErrorResponse format and appropriate status code
    """
    if isinstance(exc, ValidationError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        error_code = "INDEX_VALIDATION"
        details = {"original_value": _jsonable(exc.original_value)}
    elif isinstance(exc, SubmissionError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        error_code = SUBMISSION_ERROR_CODES.get(type(exc), "SUBMISSION_FAILED")
        details = {"index": exc.index, "stage": exc.stage}
    else:
        status_code = status.HTTP_400_BAD_REQUEST
        error_code = exc.__class__.__name__.replace("Error", "").upper()
        details = {"exception_type": exc.__class__.__name__}

    error_response = ErrorResponse(code=error_code, message=str(exc), details=details)

    logger.warning(
        f"Domain exception: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(status_code=status_code, content=error_response.model_dump())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Handle request bodies FastAPI cannot parse (missing body, invalid JSON).

    A body without an index is a missing index, so it shares the
    422 INDEX_VALIDATION response with ValidationError.
    """
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    error_response = ErrorResponse(
        code="INDEX_VALIDATION",
        message="Request body must be a JSON object with an index",
        details={"errors": errors},
    )

    logger.warning(
        f"Request validation error: {errors} - Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(),
    )


async def backend_unavailable_handler(request: Request, exc: Exception):
    """
    Global handler for store errors raised outside the dispatcher stages
    (connection setup in dependency providers, query endpoints).

    Mapping:
        - RedisError -> 503 REDIS_UNAVAILABLE
        - SQLAlchemyError -> 503 DATABASE_UNAVAILABLE
    """
    error_code = "REDIS_UNAVAILABLE" if isinstance(exc, RedisError) else "DATABASE_UNAVAILABLE"
    error_response = ErrorResponse(
        code=error_code,
        message=str(exc),
        details={"type": exc.__class__.__name__},
    )

    logger.error(
        f"Backend unavailable: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}"
    )

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_response.model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unexpected exceptions.

    Catches all unhandled exceptions and converts to 500 Internal Server Error.
    Logs full stack trace for debugging.
    """
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"error": str(exc), "type": exc.__class__.__name__},
    )

    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


def _jsonable(value):
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return repr(value)


# ============================================================================
# LIFESPAN
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the durable table on startup, release connections on shutdown."""
    try:
        database.init_db()
    except SQLAlchemyError as e:
        # API still starts; /health reports database=false until it is reachable
        logger.error(f"Database initialization failed: {e}")

    if redis_connection.health_check():
        logger.info("Redis reachable")
    else:
        logger.warning("Redis unreachable at startup; submissions will fail with 503")

    yield

    redis_connection.close_connections()
    database.dispose_engine()


# ============================================================================
# APP FACTORY
# ============================================================================


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Configuration:
        - Title: fibcalc API
        - CORS: Allow all origins (development mode)
        - Routers: /api/values
        - Health: GET /health, service info: GET /

    Returns:
        Configured FastAPI application instance

    Usage:
        >>> app = create_app()
        >>> # uvicorn fibcalc.api.main:app --reload
    """
    app = FastAPI(
        title="fibcalc API",
        version=__version__,
        description=(
            "Asynchronous Fibonacci job pipeline. Submit an index, then poll "
            "current values until the worker replaces \"pending\" with the result."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Add CORS middleware (allow all origins for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    # Register global exception handlers
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RedisError, backend_unavailable_handler)
    app.add_exception_handler(SQLAlchemyError, backend_unavailable_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(values.router, prefix="/api")

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        description="Reports Redis and database connectivity",
        tags=["health"],
    )
    async def health_check() -> HealthCheckResponse:
        """
        Health check endpoint.

        Examples:
            >>> curl http://localhost:8000/health
            {"status": "ok", "version": "0.1.0", "timestamp": 1704976800.1,
             "redis": true, "database": true}
        """
        redis_ok = await asyncio.to_thread(redis_connection.health_check)
        database_ok = await asyncio.to_thread(database.check_connection)
        return HealthCheckResponse(
            status="ok" if redis_ok and database_ok else "degraded",
            timestamp=time.time(),
            redis=redis_ok,
            database=database_ok,
        )

    @app.get(
        "/",
        response_model=ServiceInfoResponse,
        summary="Service information",
        tags=["health"],
    )
    async def service_info() -> ServiceInfoResponse:
        return ServiceInfoResponse()

    logger.info("FastAPI application created successfully")
    logger.info("Registered routers: /api/values")

    return app


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

# Usage: uvicorn fibcalc.api.main:app --reload
app = create_app()


def run() -> None:
    """Console entry point (fibcalc-api)."""
    settings = get_settings()
    uvicorn.run(
        "fibcalc.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
