"""
API Schemas Package

Contains shared Pydantic models for API Layer.
"""

from src.api.schemas.common import ErrorResponse, HealthCheckResponse

__all__ = ["ErrorResponse", "HealthCheckResponse"]
