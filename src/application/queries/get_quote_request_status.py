"""
GetQuoteRequestStatusQuery - CQRS Read Query

Query object and handler returning the status view of a quote request:
request status, one row per assignment enriched with contractor display
data, response counts and number of submitted quotes.

Responsibility:
    - Query: Data holder with request_id to query
    - Handler: Reads request, assignments and quotes, applies visibility
      rules, enriches from the contractor directory

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Visibility: the owning user, any admin, or a contractor holding an
      assignment on the request. Anyone else gets NotFound (the request's
      existence is not disclosed).
    - Contractor display data comes from ContractorDirectoryProtocol; unknown
      contractors are listed without display names
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from src.domain.quoting.entities import AssignmentStatus, QuoteRequest, QuoteRequestStatus
from src.domain.quoting.repositories import (
    ContractorDirectoryProtocol,
    ContractorInfo,
    QuoteRepositoryProtocol,
)
from src.domain.quoting.value_objects import Actor
from src.domain.shared.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class GetQuoteRequestStatusQuery(BaseModel):
    """
    Query object containing the request id to retrieve status for.

    Attributes:
        request_id: Quote request id
    """

    request_id: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class AssignmentStatusItem(BaseModel):
    """One contractor row of the status view."""

    contractor_id: str
    company_name: Optional[str] = None
    contact_name: Optional[str] = None
    status: AssignmentStatus
    assigned_at: datetime
    viewed_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    response_notes: Optional[str] = None


class QuoteRequestStatusResult(BaseModel):
    """
    Result DTO returned by GetQuoteRequestStatusQueryHandler.

    Attributes:
        request_id: Quote request id
        status: Current request status
        system_size_kwp: Requested capacity
        location: Installation location
        assignments: Per-contractor status rows in assignment order
        total_assignments / accepted_count / rejected_count / pending_count:
            Response counts (pending = assigned or viewed)
        quote_count: Number of submitted quotes
        selected_quote_id: Winning quote, if any
        cancellation_reason: Reason given on cancellation, if any
    """

    request_id: str
    status: QuoteRequestStatus
    system_size_kwp: Decimal
    location: str
    assignments: list[AssignmentStatusItem] = Field(default_factory=list)
    total_assignments: int = 0
    accepted_count: int = 0
    rejected_count: int = 0
    pending_count: int = 0
    quote_count: int = 0
    selected_quote_id: Optional[str] = None
    cancellation_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class GetQuoteRequestStatusQueryHandler:
    """
    Handler for the quote request status view.

    Usage:
        handler = GetQuoteRequestStatusQueryHandler(repository, directory)
        result = handler.handle(GetQuoteRequestStatusQuery(request_id=rid), actor)
    """

    def __init__(
        self,
        repository: QuoteRepositoryProtocol,
        contractor_directory: Optional[ContractorDirectoryProtocol] = None,
    ) -> None:
        self.repository = repository
        self.contractor_directory = contractor_directory

    def handle(self, query: GetQuoteRequestStatusQuery, actor: Actor) -> QuoteRequestStatusResult:
        """
        Build the status view.

        Process Flow:
            1. Load request (NotFound if missing)
            2. Load assignments, apply visibility (NotFound if not visible)
            3. Look up contractor display data
            4. Count responses and quotes

        Raises:
            NotFoundError: Request missing or not visible to actor
            StorageFailureError: Persistence port failure
        """
        request = self.repository.get_quote_request(query.request_id)
        if request is None:
            raise self._not_found(query.request_id)

        assignments = self.repository.load_assignments_for_request(request.id)
        if not self._is_visible(actor, request, [a.contractor_id for a in assignments]):
            logger.info(f"Request {request.id} not visible to {actor.role.value} {actor.actor_id}")
            raise self._not_found(query.request_id)

        contractors = self._lookup_contractors([a.contractor_id for a in assignments])

        items = []
        for assignment in assignments:
            info = contractors.get(assignment.contractor_id)
            items.append(
                AssignmentStatusItem(
                    contractor_id=assignment.contractor_id,
                    company_name=info.company_name if info else None,
                    contact_name=info.contact_name if info else None,
                    status=assignment.status,
                    assigned_at=assignment.assigned_at,
                    viewed_at=assignment.viewed_at,
                    responded_at=assignment.responded_at,
                    response_notes=assignment.response_notes,
                )
            )

        accepted = sum(1 for a in assignments if a.status == AssignmentStatus.ACCEPTED)
        rejected = sum(1 for a in assignments if a.status == AssignmentStatus.REJECTED)
        quotes = self.repository.list_quotes_for_request(request.id)

        return QuoteRequestStatusResult(
            request_id=request.id,
            status=request.status,
            system_size_kwp=request.system_size_kwp,
            location=request.location,
            assignments=items,
            total_assignments=len(assignments),
            accepted_count=accepted,
            rejected_count=rejected,
            pending_count=len(assignments) - accepted - rejected,
            quote_count=len(quotes),
            selected_quote_id=request.selected_quote_id,
            cancellation_reason=request.cancellation_reason,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )

    @staticmethod
    def _is_visible(actor: Actor, request: QuoteRequest, assigned_ids: list[str]) -> bool:
        if actor.is_admin or actor.owns(request.user_id):
            return True
        return actor.is_contractor and actor.actor_id in assigned_ids

    def _lookup_contractors(self, contractor_ids: list[str]) -> dict[str, ContractorInfo]:
        if self.contractor_directory is None or not contractor_ids:
            return {}
        return self.contractor_directory.get_contractors(contractor_ids)

    @staticmethod
    def _not_found(request_id: str) -> NotFoundError:
        return NotFoundError(
            f"Quote request {request_id} not found", entity="QuoteRequest", entity_id=request_id
        )
