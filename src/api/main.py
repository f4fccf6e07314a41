"""
FastAPI Application Setup

Main entry point for the Quote Engine API.

Responsibility:
    - FastAPI app initialization
    - Router registration (quote requests, quotes, pricing)
    - CORS middleware configuration
    - Domain exception to HTTP status mapping
    - Request logging middleware
    - Health check endpoint

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration

Contains:
    - create_app() factory function
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint: GET /health

Does NOT contain:
    - Business logic (delegated to Application Layer)
    - Direct storage access (uses Infrastructure Layer via dependencies.py)
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.dependencies import shutdown_dependencies
from src.api.routers import pricing, quote_requests, quotes
from src.api.schemas.common import ErrorResponse, HealthCheckResponse
from src.domain.shared.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    ConflictError,
    DomainException,
    NotFoundError,
    StorageFailureError,
    ValidationFailureError,
)
from src.infrastructure.persistence.redis.connection import health_check as redis_health_check
from src.shared.config import PRICING_STORE_REDIS, get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"

# Most specific first: the first isinstance match wins.
DOMAIN_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (ValidationFailureError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (StorageFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(exc: DomainException) -> int:
    """
    HTTP status for a domain exception.

    Examples:
        >>> status_code_for(ConflictError("duplicate"))
        409
        >>> status_code_for(DomainException("other"))
        400
    """
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Log every request with method, path, status code and duration.

    Logging Format:
        INFO: "Incoming request: POST /api/quote-requests"
        INFO: "Request completed: POST /api/quote-requests - 201 - 0.012s"
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
    Convert DomainException subclasses into ErrorResponse JSON.

    Mapping:
        - ValidationFailureError -> 400 Bad Request
        - BusinessRuleViolationError -> 422 Unprocessable Entity
        - NotFoundError -> 404 Not Found
        - ConflictError -> 409 Conflict
        - AuthorizationError -> 403 Forbidden
        - StorageFailureError -> 503 Service Unavailable
        - Other DomainException -> 400 Bad Request

    Examples:
        >>> raise BusinessRuleViolationError("...", rule="PRICE_PER_KWP_TOO_HIGH", actual=2100, limit=2000)
        >>> # Returns: 422 {"code": "PRICE_PER_KWP_TOO_HIGH", "message": "...",
        >>> #               "details": {"provided": 2100.0, "limit": 2000.0, ...}}
    """
    status_code = status_code_for(exc)
    error_response = ErrorResponse(code=exc.code, message=exc.message, details=exc.to_details())

    if isinstance(exc, StorageFailureError):
        logger.error(f"Storage failure: {exc} - Request: {request.method} {request.url.path}")
    else:
        logger.warning(
            f"Domain exception: {exc.__class__.__name__} - {exc.message} - "
            f"Request: {request.method} {request.url.path}"
        )

    return JSONResponse(status_code=status_code, content=error_response.model_dump())


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Catch-all for unexpected exceptions: 500 with the full traceback logged.
    """
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"type": exc.__class__.__name__},
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


# ============================================================================
# APP FACTORY
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release cached adapters (Redis pool) on shutdown."""
    yield
    shutdown_dependencies()


def create_app() -> FastAPI:
    """
    FastAPI application factory.

    Configuration:
        - Routers: /api/quote-requests, /api/quotes, /api/pricing
        - Health: GET /health
        - CORS: Allow all origins (development mode)

    Usage:
        >>> app = create_app()
        >>> # uvicorn src.api.main:app --reload
    """
    app = FastAPI(
        title="Quote Engine API",
        version=API_VERSION,
        description=(
            "Solar installation quote brokering: quote requests, contractor "
            "assignments and responses, priced quote submission, admin review "
            "and platform financial breakdown."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Production: restrict to specific origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(request_logging_middleware)

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(quote_requests.router, prefix="/api")
    app.include_router(quotes.router, prefix="/api")
    app.include_router(pricing.router, prefix="/api")

    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        description="Simple health check for monitoring and load balancers",
        tags=["health"],
    )
    async def health_check() -> HealthCheckResponse:
        """
        Returns "ok", or "degraded" when the Redis pricing store does not answer.
        """
        settings = get_settings()
        redis_ok = None
        if settings.pricing_store == PRICING_STORE_REDIS:
            redis_ok = redis_health_check()
        return HealthCheckResponse(
            status="degraded" if redis_ok is False else "ok",
            version=API_VERSION,
            timestamp=time.time(),
            pricing_store=settings.pricing_store,
            redis=redis_ok,
        )

    logger.info("FastAPI application created successfully")
    logger.info("Registered routers: /api/quote-requests, /api/quotes, /api/pricing")

    return app


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

# Usage: uvicorn src.api.main:app --reload
app = create_app()
