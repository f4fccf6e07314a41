"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Provides consistent error structure across all endpoints.

    Attributes:
        code: Machine-readable error code (e.g., "PRICE_PER_KWP_TOO_HIGH", "NOT_FOUND")
        message: Human-readable error message
        details: Optional additional error context (offending value, limit, ids)
    """

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "code": "PRICE_PER_KWP_TOO_HIGH",
                "message": "Price per kWp (2500) exceeds maximum allowed (2000)",
                "details": {
                    "exception_type": "BusinessRuleViolationError",
                    "rule": "PRICE_PER_KWP_TOO_HIGH",
                    "provided": 2500.0,
                    "limit": 2000.0,
                },
            }
        }
    }


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: "ok" when every checked dependency answers, else "degraded"
        version: API version
        timestamp: Unix timestamp of the check
        pricing_store: Configured pricing rules backend
        redis: Redis PING result (None when Redis is not used)
    """

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: float
    pricing_store: str
    redis: Optional[bool] = None
