"""
Quote Review Commands - CQRS Write Commands

Admin decisions on a submitted contractor quote. Reviews mutate the quote
only; they never change the quote request status.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ApproveQuoteCommand(BaseModel):
    """Approve a quote (final; an approved quote is immutable)."""

    notes: Optional[str] = Field(default=None, max_length=2000)

    model_config = {"frozen": True}


class RejectQuoteCommand(BaseModel):
    """
    Reject a quote.

    Attributes:
        reason: Required rejection reason shown to the contractor
        notes: Optional internal admin notes
    """

    reason: str = Field(..., min_length=1, max_length=1000)
    notes: Optional[str] = Field(default=None, max_length=2000)

    model_config = {"frozen": True}

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("rejection reason must not be blank")
        return value.strip()


class RequestRevisionCommand(BaseModel):
    """Send a quote back to the contractor for revision."""

    notes: Optional[str] = Field(default=None, max_length=2000)

    model_config = {"frozen": True}
