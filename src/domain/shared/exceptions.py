"""
Domain Layer Exceptions

This module defines the exception hierarchy for the Domain Layer.
All domain-specific exceptions inherit from DomainException.

Responsibility:
    - Base exception class for domain errors
    - Typed error kinds for the quoting engine (validation, business rule,
      not found, conflict, authorization, storage)
    - Carry the offending value and the violated limit for client display

Architecture Notes:
    - Part of Shared Domain (used across all subdomains)
    - API Layer maps each kind to an HTTP status code (see src/api/main.py)
    - The core performs no retries; storage errors surface as StorageFailureError
"""

from typing import Any, Optional


class DomainException(Exception):
    """
    Base exception for all domain layer errors.

    This exception serves as the root of the domain exception hierarchy.
    All domain-specific exceptions inherit from this class to enable
    type-safe error handling in Application and API layers.

    Usage:
        - Catch this in Application Layer to handle all domain errors
        - API Layer converts to appropriate HTTP status codes

    Examples:
        >>> raise DomainException("Business rule violation")

        >>> try:
        ...     # domain operation
        ... except DomainException as e:
        ...     logger.error(f"Domain error: {e}")
    """

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str) -> None:
        """
        Initialize domain exception with error message.

        Args:
            message: Human-readable error description
        """
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r})"

    def to_details(self) -> dict[str, Any]:
        """
        Structured error context for the ErrorResponse.details field.

        Subclasses extend this with their own attributes.
        """
        return {"exception_type": self.__class__.__name__}


class ValidationFailureError(DomainException):
    """
    Raised when input is malformed or out of range.

    This exception is raised when:
    - base price, price per kWp or system size is not positive
    - a required field is missing or has the wrong shape
    - a percentage in pricing rules is negative or min size exceeds max size

    Always recoverable by the caller correcting the input.

    Attributes:
        code: "OUT_OF_RANGE" for numeric bounds, "INVALID_INPUT" otherwise
        field: Name of the offending field (optional)
        value: Offending value (optional)
        limit: Limit the value was checked against (optional)

    Examples:
        >>> raise ValidationFailureError(
        ...     "Base price must be greater than 0",
        ...     field="base_price",
        ...     value=-5,
        ...     limit=0,
        ... )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        limit: Any = None,
        code: str = "OUT_OF_RANGE",
    ) -> None:
        """
        Initialize validation failure.

        Args:
            message: Error description
            field: Name of field that failed validation (optional)
            value: Value provided by the caller (optional)
            limit: Boundary the value violated (optional)
            code: Machine-readable error code
        """
        self.field = field
        self.value = value
        self.limit = limit
        self.code = code
        super().__init__(message)

    def to_details(self) -> dict[str, Any]:
        details = super().to_details()
        details.update(
            {"field": self.field, "provided": _jsonable(self.value), "limit": _jsonable(self.limit)}
        )
        return details


class BusinessRuleViolationError(DomainException):
    """
    Raised when well-formed input breaks a domain rule.

    Carries the violated rule identifier plus actual/limit values so the
    client can show "provided 2100, maximum 2000".

    Rule identifiers (see src/domain/quoting/constants.py):
        - PRICE_PER_KWP_TOO_HIGH, SYSTEM_SIZE_TOO_LARGE, SYSTEM_SIZE_TOO_SMALL
        - PRICE_CALCULATION_MISMATCH, LINE_ITEM_TOTAL_MISMATCH
        - INVALID_REQUEST_STATUS, INVALID_ASSIGNMENT_STATUS
        - NOT_ASSIGNED, TOO_MANY_CONTRACTORS, INVALID_STATUS_TRANSITION
        - QUOTE_ALREADY_APPROVED

    Examples:
        >>> raise BusinessRuleViolationError(
        ...     "Price per kWp exceeds maximum allowed",
        ...     rule="PRICE_PER_KWP_TOO_HIGH",
        ...     actual=2100,
        ...     limit=2000,
        ... )
    """

    def __init__(
        self,
        message: str,
        rule: str,
        actual: Any = None,
        limit: Any = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize business rule violation.

        Args:
            message: Error description
            rule: Machine-readable identifier of the violated rule
            actual: Value that broke the rule (optional)
            limit: Limit defined by the rule (optional)
            details: Extra context for client display (optional)
        """
        self.rule = rule
        self.code = rule
        self.actual = actual
        self.limit = limit
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(message={self.message!r}, rule={self.rule!r}, "
            f"actual={self.actual!r}, limit={self.limit!r})"
        )

    def to_details(self) -> dict[str, Any]:
        details = super().to_details()
        details.update({"rule": self.rule, "provided": _jsonable(self.actual), "limit": _jsonable(self.limit)})
        details.update({k: _jsonable(v) for k, v in self.details.items()})
        return details


class NotFoundError(DomainException):
    """
    Raised when a referenced request, assignment or quote does not exist.

    Also raised when the record exists but is not visible to the caller.

    Examples:
        >>> raise NotFoundError("Quote request not found", entity="QuoteRequest", entity_id="qr-1")
    """

    code = "NOT_FOUND"

    def __init__(
        self, message: str, entity: Optional[str] = None, entity_id: Optional[str] = None
    ) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message)

    def to_details(self) -> dict[str, Any]:
        details = super().to_details()
        details.update({"entity": self.entity, "id": self.entity_id})
        return details


class ConflictError(DomainException):
    """
    Raised on duplicate submission.

    The canonical case is a second quote by the same contractor for the
    same request. Persistence adapters raise it from their uniqueness
    constraint so concurrent submissions cannot both succeed.
    """

    code = "CONFLICT"

    def __init__(
        self, message: str, request_id: Optional[str] = None, contractor_id: Optional[str] = None
    ) -> None:
        self.request_id = request_id
        self.contractor_id = contractor_id
        super().__init__(message)

    def to_details(self) -> dict[str, Any]:
        details = super().to_details()
        details.update({"request_id": self.request_id, "contractor_id": self.contractor_id})
        return details


class AuthorizationError(DomainException):
    """Raised when the actor's role or ownership does not permit the action."""

    code = "FORBIDDEN"

    def __init__(self, message: str, actor_id: Optional[str] = None, role: Optional[str] = None) -> None:
        self.actor_id = actor_id
        self.role = role
        super().__init__(message)


class StorageFailureError(DomainException):
    """
    Raised when a persistence port fails.

    Always surfaced to the caller as a fault, except inside
    PricingConfigProvider which falls back to default rules.

    Attributes:
        operation: Port operation that failed (e.g. "load_pricing_rules")
        original_error: Underlying exception from the driver (optional)

    Examples:
        >>> raise StorageFailureError(
        ...     "Cannot read pricing rules",
        ...     operation="load_pricing_rules",
        ...     original_error=RedisError("Connection refused"),
        ... )
    """

    code = "STORAGE_FAILURE"

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        self.operation = operation
        self.original_error = original_error

        # Build detailed message with operation and original error
        detailed_parts = [message]
        if operation:
            detailed_parts.append(f"Operation: {operation}")
        if original_error:
            detailed_parts.append(
                f"Original error: {type(original_error).__name__}: {original_error}"
            )

        super().__init__(" | ".join(detailed_parts))


def _jsonable(value: Any) -> Any:
    """Convert Decimal and other non-JSON scalars to plain values for details."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    try:
        return float(value)
    except (TypeError, ValueError):
        return str(value)
