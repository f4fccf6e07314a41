"""
Quoting Domain Entities.

Entities have identity and lifecycle - they are mutable objects tracked by ID.

Available Entities:
    - QuoteRequest / QuoteRequestStatus: aggregate root and its state machine
    - ContractorAssignment / AssignmentStatus / ResponseDecision
    - ContractorQuote / AdminReviewStatus
"""

from src.domain.quoting.entities.contractor_assignment import (
    AssignmentStatus,
    ContractorAssignment,
    ResponseDecision,
)
from src.domain.quoting.entities.contractor_quote import AdminReviewStatus, ContractorQuote
from src.domain.quoting.entities.quote_request import (
    ALLOWED_TRANSITIONS,
    QuoteRequest,
    QuoteRequestStatus,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "AdminReviewStatus",
    "AssignmentStatus",
    "ContractorAssignment",
    "ContractorQuote",
    "QuoteRequest",
    "QuoteRequestStatus",
    "ResponseDecision",
]
