"""
Shared Application Models

Responsibility:
    Result DTOs returned by the QuoteEngineService and its query handlers.
    Converts domain entities into plain, serializable pydantic models.

Architecture Notes:
    - Part of Application Layer (Shared)
    - Used by Commands, Queries, Services and the API Layer (as response models)
    - Conversion lives in from_entity() classmethods; domain entities never
      import these models

Contains:
    - QuoteRequestResult: Snapshot of a QuoteRequest
    - AssignmentResult: Snapshot of a ContractorAssignment
    - QuoteResult: Snapshot of a ContractorQuote (with line items)
    - ContractorResponseResult: Outcome of contractor_respond
    - QuoteSubmissionResult: Outcome of submit_quote
    - PricingRulesResult: Current pricing rules

Does NOT contain:
    - Business logic (belongs to Domain Layer)
    - HTTP models (belongs to API Layer)
    - Infrastructure details (belongs to Infrastructure Layer)
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from src.domain.quoting.entities import (
    AdminReviewStatus,
    AssignmentStatus,
    ContractorAssignment,
    ContractorQuote,
    QuoteRequest,
    QuoteRequestStatus,
)
from src.domain.quoting.pricing_config import PricingRules
from src.domain.quoting.services.quote_request_lifecycle import QuoteSubmission
from src.domain.quoting.value_objects import FinancialBreakdown, LineItem, QuotationTotals


class QuoteRequestResult(BaseModel):
    """
    Snapshot of a quote request.

    Usage:
        >>> result = QuoteRequestResult.from_entity(request)
        >>> result.status
        <QuoteRequestStatus.PENDING: 'pending'>
    """

    id: str
    user_id: str
    system_size_kwp: Decimal
    location: str
    service_area: Optional[str] = None
    selected_contractors: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)
    status: QuoteRequestStatus
    cancellation_reason: Optional[str] = None
    selected_quote_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, request: QuoteRequest) -> "QuoteRequestResult":
        return cls(
            id=request.id,
            user_id=request.user_id,
            system_size_kwp=request.system_size_kwp,
            location=request.location,
            service_area=request.service_area,
            selected_contractors=list(request.selected_contractors),
            details=dict(request.details),
            status=request.status,
            cancellation_reason=request.cancellation_reason,
            selected_quote_id=request.selected_quote_id,
            created_at=request.created_at,
            updated_at=request.updated_at,
        )


class AssignmentResult(BaseModel):
    """Snapshot of one contractor assignment."""

    id: str
    request_id: str
    contractor_id: str
    status: AssignmentStatus
    assigned_at: datetime
    viewed_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    response_notes: Optional[str] = None

    @classmethod
    def from_entity(cls, assignment: ContractorAssignment) -> "AssignmentResult":
        return cls(
            id=assignment.id,
            request_id=assignment.request_id,
            contractor_id=assignment.contractor_id,
            status=assignment.status,
            assigned_at=assignment.assigned_at,
            viewed_at=assignment.viewed_at,
            responded_at=assignment.responded_at,
            response_notes=assignment.response_notes,
        )


class QuoteResult(BaseModel):
    """
    Snapshot of a contractor quote including its financial decomposition.

    Attributes:
        base_price ... platform_revenue: Amounts fixed at submission time
        line_items: Rows ordered by line_order
        admin_status: Review state (pending_review, approved, rejected, revision_needed)
    """

    id: str
    request_id: str
    contractor_id: str
    base_price: Decimal
    price_per_kwp: Decimal
    markup_amount: Decimal
    total_user_price: Decimal
    commission_amount: Decimal
    contractor_net_amount: Decimal
    platform_revenue: Decimal
    line_items: list[LineItem] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)
    admin_status: AdminReviewStatus
    admin_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    submitted_at: datetime

    @classmethod
    def from_entity(cls, quote: ContractorQuote) -> "QuoteResult":
        return cls(
            id=quote.id,
            request_id=quote.request_id,
            contractor_id=quote.contractor_id,
            base_price=quote.base_price,
            price_per_kwp=quote.price_per_kwp,
            markup_amount=quote.markup_amount,
            total_user_price=quote.total_user_price,
            commission_amount=quote.commission_amount,
            contractor_net_amount=quote.contractor_net_amount,
            platform_revenue=quote.platform_revenue,
            line_items=list(quote.line_items),
            details=dict(quote.details),
            admin_status=quote.admin_status,
            admin_notes=quote.admin_notes,
            rejection_reason=quote.rejection_reason,
            reviewed_by=quote.reviewed_by,
            reviewed_at=quote.reviewed_at,
            submitted_at=quote.submitted_at,
        )


class ContractorResponseResult(BaseModel):
    """Assignment after the contractor's answer plus the derived request status."""

    assignment: AssignmentResult
    request_status: QuoteRequestStatus


class QuoteSubmissionResult(BaseModel):
    """
    Outcome of a quote submission.

    Attributes:
        quote: Stored quote
        breakdown: Financial decomposition of the base price
        totals: Aggregates over the stored line items (all zero without items)
        request_status: Request status after the submission
    """

    quote: QuoteResult
    breakdown: FinancialBreakdown
    totals: QuotationTotals
    request_status: QuoteRequestStatus

    @classmethod
    def from_submission(cls, submission: QuoteSubmission) -> "QuoteSubmissionResult":
        return cls(
            quote=QuoteResult.from_entity(submission.quote),
            breakdown=submission.breakdown,
            totals=submission.totals,
            request_status=submission.request_status,
        )


class PricingRulesResult(BaseModel):
    """Pricing rules as exposed to callers."""

    max_price_per_kwp: Decimal
    min_system_size_kwp: Decimal
    max_system_size_kwp: Decimal
    platform_markup_percent: Decimal
    platform_commission_percent: Decimal
    vat_rate_percent: Decimal

    @classmethod
    def from_rules(cls, rules: PricingRules) -> "PricingRulesResult":
        return cls(
            max_price_per_kwp=rules.max_price_per_kwp,
            min_system_size_kwp=rules.min_system_size_kwp,
            max_system_size_kwp=rules.max_system_size_kwp,
            platform_markup_percent=rules.platform_markup_percent,
            platform_commission_percent=rules.platform_commission_percent,
            vat_rate_percent=rules.vat_rate_percent,
        )
