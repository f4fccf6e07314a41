"""
ContractorQuote Entity.

A contractor's priced proposal against a specific quote request, with the
platform's financial decomposition attached at submission time.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from src.domain.quoting.constants import RULE_QUOTE_ALREADY_APPROVED
from src.domain.quoting.entities.quote_request import new_id, utc_now
from src.domain.quoting.value_objects.financial_breakdown import FinancialBreakdown
from src.domain.quoting.value_objects.line_item import LineItem
from src.domain.shared.exceptions import BusinessRuleViolationError


class AdminReviewStatus(str, Enum):
    """
    Admin review states of ContractorQuote.

    PENDING_REVIEW -> APPROVED | REJECTED | REVISION_NEEDED
    APPROVED is final: an approved quote is immutable.
    """

    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVISION_NEEDED = "revision_needed"


@dataclass
class ContractorQuote:
    """
    Contractor's quote for one request.

    One quote exists per (request_id, contractor_id); a second submission is
    a Conflict. Only admin review mutates it afterwards.

    Attributes:
        request_id: Quote request being priced
        contractor_id: Submitting contractor
        base_price: Contractor's price
        price_per_kwp: Contractor's price per kWp
        markup_amount / total_user_price / commission_amount /
        contractor_net_amount / platform_revenue: Values from FinancialBreakdown
        line_items: Ordered rows of a detailed quotation (may be empty)
        details: Opaque pass-through data (system specs, warranty terms, ...)
        admin_status: Review state
        admin_notes / rejection_reason / reviewed_by / reviewed_at: Review trail
        submitted_at: Submission timestamp
        id: Opaque identifier
    """

    request_id: str
    contractor_id: str
    base_price: Decimal
    price_per_kwp: Decimal
    markup_amount: Decimal
    total_user_price: Decimal
    commission_amount: Decimal
    contractor_net_amount: Decimal
    platform_revenue: Decimal
    line_items: list[LineItem] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)
    admin_status: AdminReviewStatus = AdminReviewStatus.PENDING_REVIEW
    admin_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    submitted_at: datetime = field(default_factory=utc_now)
    id: str = field(default_factory=new_id)

    @classmethod
    def from_breakdown(
        cls,
        request_id: str,
        contractor_id: str,
        breakdown: FinancialBreakdown,
        line_items: Optional[list[LineItem]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> "ContractorQuote":
        """
        Factory method building a quote from a computed FinancialBreakdown.

        Line items are stored sorted by line_order.
        """
        return cls(
            request_id=request_id,
            contractor_id=contractor_id,
            base_price=breakdown.base_price,
            price_per_kwp=breakdown.price_per_kwp,
            markup_amount=breakdown.markup_amount,
            total_user_price=breakdown.total_user_price,
            commission_amount=breakdown.commission_amount,
            contractor_net_amount=breakdown.contractor_net_amount,
            platform_revenue=breakdown.platform_revenue,
            line_items=sorted(line_items or [], key=lambda item: item.line_order),
            details=dict(details or {}),
        )

    @property
    def is_approved(self) -> bool:
        return self.admin_status == AdminReviewStatus.APPROVED

    def approve(self, admin_id: str, notes: Optional[str] = None) -> None:
        self._review(AdminReviewStatus.APPROVED, admin_id, notes=notes)

    def reject(self, admin_id: str, reason: str, notes: Optional[str] = None) -> None:
        self._review(AdminReviewStatus.REJECTED, admin_id, notes=notes)
        self.rejection_reason = reason

    def request_revision(self, admin_id: str, notes: Optional[str] = None) -> None:
        self._review(AdminReviewStatus.REVISION_NEEDED, admin_id, notes=notes)

    def _review(self, status: AdminReviewStatus, admin_id: str, notes: Optional[str]) -> None:
        """
        Apply an admin review decision.

        Raises:
            BusinessRuleViolationError: If the quote is already approved
        """
        if self.is_approved:
            raise BusinessRuleViolationError(
                "Approved quotes cannot be reviewed again",
                rule=RULE_QUOTE_ALREADY_APPROVED,
                actual=self.admin_status.value,
            )
        self.admin_status = status
        self.admin_notes = notes
        self.reviewed_by = admin_id
        self.reviewed_at = utc_now()
