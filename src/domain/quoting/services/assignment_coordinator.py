"""
AssignmentCoordinator - Domain Service

Manages the many-to-one relationship between invited contractors and their
quote request, and derives the request's status from the individual
assignment responses.

Business Rules:
    - Creating an assignment for an existing (request, contractor) pair is a
      silent no-op
    - A contractor answers once, from ASSIGNED or VIEWED only
    - recompute(): any acceptance lifts the request to at least IN_PROGRESS
      (never downgrades); all rejected with no acceptance sets REJECTED, but
      only from a pre-response status; otherwise no change
    - The derivation reads every assignment fresh and depends only on the
      multiset of statuses, so it is idempotent and order-independent
"""

import logging
from collections import Counter
from typing import Iterable, Optional

from src.domain.quoting.entities.contractor_assignment import (
    AssignmentStatus,
    ContractorAssignment,
    ResponseDecision,
)
from src.domain.quoting.entities.quote_request import (
    PRE_RESPONSE_STATUSES,
    PROGRESS_RANK,
    TERMINAL_STATUSES,
    QuoteRequest,
    QuoteRequestStatus,
)
from src.domain.quoting.repositories.quote_repository import QuoteRepositoryProtocol
from src.domain.shared.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def derive_request_status(
    current: QuoteRequestStatus, assignment_statuses: Iterable[AssignmentStatus]
) -> QuoteRequestStatus:
    """
    Derive the request status implied by a set of assignment statuses.

    Args:
        current: Request status right now
        assignment_statuses: Status of every assignment of the request

    Returns:
        Status the request should have (may equal current)

    Examples:
        >>> S, A = QuoteRequestStatus, AssignmentStatus
        >>> derive_request_status(S.PENDING, [A.ACCEPTED, A.REJECTED])
        <QuoteRequestStatus.IN_PROGRESS: 'in-progress'>
        >>> derive_request_status(S.PENDING, [A.REJECTED, A.REJECTED])
        <QuoteRequestStatus.REJECTED: 'rejected'>
        >>> derive_request_status(S.IN_PROGRESS, [A.REJECTED, A.REJECTED])
        <QuoteRequestStatus.IN_PROGRESS: 'in-progress'>
    """
    if current in TERMINAL_STATUSES:
        return current

    counts = Counter(assignment_statuses)
    total = sum(counts.values())
    accepted = counts[AssignmentStatus.ACCEPTED]
    rejected = counts[AssignmentStatus.REJECTED]

    if accepted > 0:
        if PROGRESS_RANK[current] < PROGRESS_RANK[QuoteRequestStatus.IN_PROGRESS]:
            return QuoteRequestStatus.IN_PROGRESS
        return current

    if total > 0 and rejected == total and current in PRE_RESPONSE_STATUSES:
        return QuoteRequestStatus.REJECTED

    return current


class AssignmentCoordinator:
    """
    Assignment fan-out, contractor responses and status derivation.

    Attributes:
        repository: Persistence port (assignments and requests)

    Examples:
        >>> coordinator = AssignmentCoordinator(repository)
        >>> coordinator.create_assignments(request.id, ["c-1", "c-2"])
        2
        >>> coordinator.record_response(request.id, "c-1", ResponseDecision.ACCEPT)
        >>> repository.get_quote_request(request.id).status
        <QuoteRequestStatus.IN_PROGRESS: 'in-progress'>
    """

    def __init__(self, repository: QuoteRepositoryProtocol) -> None:
        self.repository = repository

    def create_assignments(self, request_id: str, contractor_ids: Iterable[str]) -> int:
        """
        Create an ASSIGNED assignment for each contractor.

        Idempotent: duplicate ids in the input and pairs that already exist
        are skipped.

        Returns:
            Number of assignments actually created
        """
        unique_ids = list(dict.fromkeys(contractor_ids))
        if not unique_ids:
            return 0

        assignments = [
            ContractorAssignment(request_id=request_id, contractor_id=contractor_id)
            for contractor_id in unique_ids
        ]
        inserted = self.repository.insert_assignments(assignments)
        logger.info(
            f"Assignments for request {request_id}: {inserted} created, "
            f"{len(unique_ids) - inserted} already existed"
        )
        return inserted

    def get_assignment(self, request_id: str, contractor_id: str) -> ContractorAssignment:
        """
        Raises:
            NotFoundError: If the contractor is not assigned to the request
        """
        assignment = self.repository.find_assignment(request_id, contractor_id)
        if assignment is None:
            raise NotFoundError(
                f"No assignment for contractor {contractor_id} on request {request_id}",
                entity="ContractorAssignment",
                entity_id=f"{request_id}:{contractor_id}",
            )
        return assignment

    def mark_viewed(self, request_id: str, contractor_id: str) -> ContractorAssignment:
        """ASSIGNED -> VIEWED; other statuses are returned unchanged."""
        assignment = self.get_assignment(request_id, contractor_id)
        if assignment.mark_viewed():
            self.repository.update_assignment(assignment)
            logger.info(f"Contractor {contractor_id} viewed request {request_id}")
        return assignment

    def record_response(
        self,
        request_id: str,
        contractor_id: str,
        decision: ResponseDecision,
        notes: Optional[str] = None,
    ) -> ContractorAssignment:
        """
        Record a contractor's accept/reject answer and re-derive request status.

        Raises:
            NotFoundError: If no assignment exists
            BusinessRuleViolationError: INVALID_ASSIGNMENT_STATUS if already answered
        """
        assignment = self.get_assignment(request_id, contractor_id)
        assignment.respond(decision, notes)
        self.repository.update_assignment(assignment)
        logger.info(
            f"Contractor {contractor_id} responded '{decision.value}' to request {request_id}"
        )
        self.recompute(request_id)
        return assignment

    def recompute(self, request_id: str) -> QuoteRequestStatus:
        """
        Re-derive and persist the request status from a fresh read of all
        assignments.

        Returns:
            Resulting request status

        Raises:
            NotFoundError: If the request does not exist
        """
        request = self._load_request(request_id)
        assignments = self.repository.load_assignments_for_request(request_id)
        target = derive_request_status(request.status, (a.status for a in assignments))

        if target != request.status:
            previous = request.status
            request.transition_to(target)
            self.repository.save_quote_request(request)
            logger.info(
                f"Request {request_id} status {previous.value} -> {target.value} "
                f"({len(assignments)} assignments)"
            )
        return request.status

    def _load_request(self, request_id: str) -> QuoteRequest:
        request = self.repository.get_quote_request(request_id)
        if request is None:
            raise NotFoundError(
                f"Quote request {request_id} not found", entity="QuoteRequest", entity_id=request_id
            )
        return request
