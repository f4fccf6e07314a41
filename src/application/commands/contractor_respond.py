"""
ContractorRespondCommand - CQRS Write Command

A contractor's accept/reject answer to a quote request invitation.

Architecture Notes:
    - The contractor is identified by the caller's Actor, not by the body
    - Respondable-state checks live in ContractorAssignment.respond()
"""

from typing import Optional

from pydantic import BaseModel, Field

from src.domain.quoting.entities import ResponseDecision


class ContractorRespondCommand(BaseModel):
    """
    Attributes:
        decision: "accept" or "reject"
        notes: Optional message for the requesting user

    Examples:
        >>> ContractorRespondCommand(decision="accept").decision
        <ResponseDecision.ACCEPT: 'accept'>
    """

    decision: ResponseDecision
    notes: Optional[str] = Field(default=None, max_length=2000)

    model_config = {"frozen": True}
