"""
ContractorAssignment Entity.

Relationship record between a quote request and one invited contractor,
carrying the contractor's response state.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from src.domain.quoting.constants import RULE_INVALID_ASSIGNMENT_STATUS
from src.domain.quoting.entities.quote_request import new_id, utc_now
from src.domain.shared.exceptions import BusinessRuleViolationError


class AssignmentStatus(str, Enum):
    """
    Lifecycle states of ContractorAssignment.

    ASSIGNED -> VIEWED -> ACCEPTED | REJECTED
    (ASSIGNED -> ACCEPTED | REJECTED is also valid; viewing is optional)
    """

    ASSIGNED = "assigned"
    VIEWED = "viewed"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ResponseDecision(str, Enum):
    """Contractor's answer to an invitation."""

    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def resulting_status(self) -> AssignmentStatus:
        return AssignmentStatus.ACCEPTED if self is ResponseDecision.ACCEPT else AssignmentStatus.REJECTED


RESPONDABLE_STATUSES: frozenset[AssignmentStatus] = frozenset(
    {AssignmentStatus.ASSIGNED, AssignmentStatus.VIEWED}
)


@dataclass
class ContractorAssignment:
    """
    Invitation of one contractor onto one request.

    At most one assignment exists per (request_id, contractor_id) pair.
    The response is recorded exactly once; assignments are never deleted.

    Attributes:
        request_id: Owning quote request
        contractor_id: Invited contractor
        status: Response state
        assigned_at: When the invitation was created
        viewed_at: When the contractor first opened the request (optional)
        responded_at: When the contractor answered (optional)
        response_notes: Free-text notes sent with the answer (optional)
        id: Opaque identifier
    """

    request_id: str
    contractor_id: str
    status: AssignmentStatus = AssignmentStatus.ASSIGNED
    assigned_at: datetime = field(default_factory=utc_now)
    viewed_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    response_notes: Optional[str] = None
    id: str = field(default_factory=new_id)

    @property
    def key(self) -> tuple[str, str]:
        return (self.request_id, self.contractor_id)

    @property
    def is_respondable(self) -> bool:
        return self.status in RESPONDABLE_STATUSES

    def mark_viewed(self) -> bool:
        """
        ASSIGNED -> VIEWED. Any other status is left alone.

        Returns:
            True if the status changed
        """
        if self.status != AssignmentStatus.ASSIGNED:
            return False
        self.status = AssignmentStatus.VIEWED
        self.viewed_at = utc_now()
        return True

    def respond(self, decision: ResponseDecision, notes: Optional[str] = None) -> None:
        """
        Record the contractor's accept/reject answer.

        Raises:
            BusinessRuleViolationError: If the assignment was already answered
        """
        if not self.is_respondable:
            raise BusinessRuleViolationError(
                f"Cannot respond to assignment in status '{self.status.value}'",
                rule=RULE_INVALID_ASSIGNMENT_STATUS,
                actual=self.status.value,
                limit=[s.value for s in sorted(RESPONDABLE_STATUSES, key=lambda s: s.value)],
            )
        self.status = decision.resulting_status
        self.responded_at = utc_now()
        self.response_notes = notes
