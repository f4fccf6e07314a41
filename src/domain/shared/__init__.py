"""
Shared Domain Module

Shared domain concepts used across subdomains.

This module exports:
    - DomainException: Base exception for all domain errors
    - Typed error kinds raised by the quoting engine
"""

from .exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    ConflictError,
    DomainException,
    NotFoundError,
    StorageFailureError,
    ValidationFailureError,
)

__all__ = [
    "DomainException",
    "ValidationFailureError",
    "BusinessRuleViolationError",
    "NotFoundError",
    "ConflictError",
    "AuthorizationError",
    "StorageFailureError",
]
