"""
QuoteRequest Entity.

Aggregate root of the quoting subdomain: a user's ask for solar installation
quotes, scoped to a system size and a location.

Unlike Value Objects, Entities are mutable and track their state over time.
The request is never physically deleted; it is soft-cancelled via status.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from src.domain.quoting.constants import (
    DEFAULT_MAX_CONTRACTORS_PER_REQUEST,
    RULE_CONTRACTOR_ALREADY_ASSIGNED,
    RULE_INVALID_STATUS_TRANSITION,
    RULE_TOO_MANY_CONTRACTORS,
)
from src.domain.shared.exceptions import BusinessRuleViolationError, ValidationFailureError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


class QuoteRequestStatus(str, Enum):
    """
    Lifecycle states of QuoteRequest.

    Main line:
        PENDING -> CONTRACTORS_SELECTED -> QUOTES_RECEIVED -> QUOTE_SELECTED -> COMPLETED

    Side branches:
        IN_PROGRESS: at least one contractor accepted the request
        REJECTED: every invited contractor rejected it
        CANCELLED: terminal, reachable from any non-terminal state

    OPEN is a legacy pre-response status still found on older records; it
    behaves like PENDING.
    """

    PENDING = "pending"
    OPEN = "open"
    CONTRACTORS_SELECTED = "contractors_selected"
    IN_PROGRESS = "in-progress"
    QUOTES_RECEIVED = "quotes_received"
    QUOTE_SELECTED = "quote_selected"
    COMPLETED = "completed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


S = QuoteRequestStatus

TERMINAL_STATUSES: frozenset[QuoteRequestStatus] = frozenset({S.COMPLETED, S.CANCELLED})

# Statuses before any contractor has accepted; the all-rejected rule only
# applies from here.
PRE_RESPONSE_STATUSES: frozenset[QuoteRequestStatus] = frozenset(
    {S.PENDING, S.OPEN, S.CONTRACTORS_SELECTED}
)

# Single source of truth for request state changes.
ALLOWED_TRANSITIONS: dict[QuoteRequestStatus, frozenset[QuoteRequestStatus]] = {
    S.PENDING: frozenset(
        {S.CONTRACTORS_SELECTED, S.QUOTES_RECEIVED, S.IN_PROGRESS, S.REJECTED, S.CANCELLED}
    ),
    S.OPEN: frozenset(
        {S.CONTRACTORS_SELECTED, S.QUOTES_RECEIVED, S.IN_PROGRESS, S.REJECTED, S.CANCELLED}
    ),
    S.CONTRACTORS_SELECTED: frozenset(
        {S.QUOTES_RECEIVED, S.IN_PROGRESS, S.REJECTED, S.CANCELLED}
    ),
    S.IN_PROGRESS: frozenset({S.QUOTES_RECEIVED, S.QUOTE_SELECTED, S.CANCELLED}),
    S.QUOTES_RECEIVED: frozenset({S.QUOTE_SELECTED, S.CANCELLED}),
    S.REJECTED: frozenset({S.IN_PROGRESS, S.CANCELLED}),
    S.QUOTE_SELECTED: frozenset({S.COMPLETED, S.CANCELLED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset(),
}

# How far a request has progressed; used so derived status never moves backwards.
PROGRESS_RANK: dict[QuoteRequestStatus, int] = {
    S.PENDING: 0,
    S.OPEN: 0,
    S.CONTRACTORS_SELECTED: 0,
    S.REJECTED: 0,
    S.IN_PROGRESS: 1,
    S.QUOTES_RECEIVED: 2,
    S.QUOTE_SELECTED: 3,
    S.COMPLETED: 4,
    S.CANCELLED: 4,
}


@dataclass
class QuoteRequest:
    """
    Mutable aggregate root representing a user's request for quotes.

    Attributes:
        user_id: Owning end user
        system_size_kwp: Requested system capacity in kWp
        location: Installation address / locality
        service_area: Service area used for contractor matching (optional)
        selected_contractors: Ordered, duplicate-free contractor ids
        details: Opaque pass-through data (property details, electricity
            consumption, inspection schedule); never inspected by the core
        status: Current lifecycle state
        cancellation_reason: Reason given on cancellation (optional)
        selected_quote_id: Quote chosen by the user (optional)
        id: Opaque identifier
        created_at: Creation timestamp
        updated_at: Last modification timestamp

    Invariants:
        - len(selected_contractors) <= max contractors per request
        - a contractor id appears at most once

    Examples:
        >>> request = QuoteRequest(
        ...     user_id="user-1",
        ...     system_size_kwp=Decimal("10"),
        ...     location="Riyadh",
        ...     selected_contractors=["c-1", "c-2"],
        ... )
        >>> request.status
        <QuoteRequestStatus.PENDING: 'pending'>
    """

    # Required fields
    user_id: str
    system_size_kwp: Decimal
    location: str

    # Optional fields
    service_area: Optional[str] = None
    selected_contractors: list[str] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)

    # State tracking
    status: QuoteRequestStatus = QuoteRequestStatus.PENDING
    cancellation_reason: Optional[str] = None
    selected_quote_id: Optional[str] = None

    # Identity and timestamps (auto-generated)
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """
        Validate required fields and the contractor list invariant.

        Raises:
            ValidationFailureError: If location is blank or contractor ids repeat
        """
        if not self.location or not self.location.strip():
            raise ValidationFailureError(
                "location is required", field="location", value=self.location, code="INVALID_INPUT"
            )
        if len(set(self.selected_contractors)) != len(self.selected_contractors):
            raise ValidationFailureError(
                "selected_contractors must not contain duplicates",
                field="selected_contractors",
                value=list(self.selected_contractors),
                code="INVALID_INPUT",
            )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def has_contractor(self, contractor_id: str) -> bool:
        return contractor_id in self.selected_contractors

    def can_transition_to(self, target: QuoteRequestStatus) -> bool:
        """A transition to the current status is always allowed (no-op)."""
        return target == self.status or target in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, target: QuoteRequestStatus) -> bool:
        """
        Move the request to target status.

        Args:
            target: Desired status

        Returns:
            True if status changed, False if it already was target

        Raises:
            BusinessRuleViolationError: If the transition is not allowed
        """
        if target == self.status:
            return False
        if target not in ALLOWED_TRANSITIONS[self.status]:
            raise BusinessRuleViolationError(
                f"Cannot move quote request from '{self.status.value}' to '{target.value}'",
                rule=RULE_INVALID_STATUS_TRANSITION,
                actual=self.status.value,
                limit=target.value,
            )
        self.status = target
        self.touch()
        return True

    def add_contractor(
        self, contractor_id: str, max_contractors: int = DEFAULT_MAX_CONTRACTORS_PER_REQUEST
    ) -> None:
        """
        Append contractor to the selection.

        Raises:
            BusinessRuleViolationError: If already selected or cap reached
        """
        if self.has_contractor(contractor_id):
            raise BusinessRuleViolationError(
                f"Contractor {contractor_id} is already assigned to this request",
                rule=RULE_CONTRACTOR_ALREADY_ASSIGNED,
                actual=contractor_id,
            )
        if len(self.selected_contractors) >= max_contractors:
            raise BusinessRuleViolationError(
                f"Maximum {max_contractors} contractors allowed per request",
                rule=RULE_TOO_MANY_CONTRACTORS,
                actual=len(self.selected_contractors) + 1,
                limit=max_contractors,
            )
        self.selected_contractors.append(contractor_id)
        self.touch()

    def remove_contractor(self, contractor_id: str) -> bool:
        """Drop contractor from the selection; returns False if it was not there."""
        if not self.has_contractor(contractor_id):
            return False
        self.selected_contractors.remove(contractor_id)
        self.touch()
        return True

    def touch(self) -> None:
        self.updated_at = utc_now()

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "system_size_kwp": str(self.system_size_kwp),
            "location": self.location,
            "service_area": self.service_area,
            "selected_contractors": list(self.selected_contractors),
            "details": dict(self.details),
            "status": self.status.value,
            "cancellation_reason": self.cancellation_reason,
            "selected_quote_id": self.selected_quote_id,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
