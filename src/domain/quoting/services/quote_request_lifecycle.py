"""
QuoteRequestLifecycle - Domain Service

State machine governing a single quote request from creation through
contractor assignment, contractor response, quote submission, admin review,
quote selection and completion.

Architecture Notes:
    - Owns every business-triggered request transition; the allowed
      transitions table lives on the aggregate (ALLOWED_TRANSITIONS)
    - Depends on FinancialCalculator (price validation and breakdown),
      AssignmentCoordinator (fan-out and derived status) and
      PricingConfigProvider (current rules)
    - Authorization is plain role/ownership comparison on an Actor the
      caller already authenticated

Business Rules:
    - create: status PENDING; one assignment per selected contractor
    - submit_quote: only while request status is pending, contractors_selected,
      quotes_received or open (plus in-progress under ACCEPTED eligibility);
      one quote per contractor per request; the first quote moves the
      request to quotes_received
    - contractor eligibility is configurable (SubmissionEligibility):
      SELECTED (listed on the request) or ACCEPTED (assignment accepted)
    - admin review mutates the quote only, never the request status
    - cancel: any non-terminal status -> cancelled, reason recorded
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional

from src.domain.quoting.constants import (
    DEFAULT_MAX_CONTRACTORS_PER_REQUEST,
    PRICE_TOLERANCE,
    RULE_INVALID_REQUEST_STATUS,
    RULE_INVALID_STATUS_TRANSITION,
    RULE_NOT_ASSIGNED,
    RULE_QUOTE_NOT_APPROVED,
    RULE_TOO_MANY_CONTRACTORS,
    ActorRole,
    SubmissionEligibility,
)
from src.domain.quoting.entities.contractor_assignment import (
    AssignmentStatus,
    ContractorAssignment,
    ResponseDecision,
)
from src.domain.quoting.entities.contractor_quote import ContractorQuote
from src.domain.quoting.entities.quote_request import QuoteRequest, QuoteRequestStatus
from src.domain.quoting.repositories.quote_repository import QuoteRepositoryProtocol
from src.domain.quoting.services.assignment_coordinator import AssignmentCoordinator
from src.domain.quoting.services.financial_calculator import FinancialCalculator, Number
from src.domain.quoting.services.pricing_config_provider import PricingConfigProvider
from src.domain.quoting.value_objects.actor import Actor
from src.domain.quoting.value_objects.financial_breakdown import FinancialBreakdown
from src.domain.quoting.value_objects.line_item import LineItem
from src.domain.quoting.value_objects.quotation_totals import QuotationTotals
from src.domain.shared.exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    ConflictError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

S = QuoteRequestStatus

# Request statuses in which a contractor may still submit a quote.
SUBMITTABLE_STATUSES: frozenset[QuoteRequestStatus] = frozenset(
    {S.PENDING, S.CONTRACTORS_SELECTED, S.QUOTES_RECEIVED, S.OPEN}
)

# With ACCEPTED eligibility the submitter has already moved the request to
# in-progress, so that status must accept submissions too.
ACCEPTED_SUBMITTABLE_STATUSES: frozenset[QuoteRequestStatus] = SUBMITTABLE_STATUSES | {S.IN_PROGRESS}

# Request statuses from which the owner may pick a winning quote.
SELECTABLE_STATUSES: frozenset[QuoteRequestStatus] = frozenset({S.QUOTES_RECEIVED, S.IN_PROGRESS})


@dataclass(frozen=True)
class QuoteSubmission:
    """Outcome of submit_quote()."""

    quote: ContractorQuote
    breakdown: FinancialBreakdown
    totals: QuotationTotals
    request_status: QuoteRequestStatus


class QuoteRequestLifecycle:
    """
    Business-triggered transitions of QuoteRequest with their guards.

    Attributes:
        repository: Persistence port
        calculator: FinancialCalculator
        coordinator: AssignmentCoordinator
        pricing_provider: PricingConfigProvider
        max_contractors_per_request: Cap on selected contractors (10)
        submission_eligibility: SELECTED (default) or ACCEPTED
        price_tolerance: Allowed base price vs ppk * size gap (0.01)
    """

    def __init__(
        self,
        repository: QuoteRepositoryProtocol,
        calculator: FinancialCalculator,
        coordinator: AssignmentCoordinator,
        pricing_provider: PricingConfigProvider,
        max_contractors_per_request: int = DEFAULT_MAX_CONTRACTORS_PER_REQUEST,
        submission_eligibility: SubmissionEligibility = SubmissionEligibility.SELECTED,
        price_tolerance: Decimal = PRICE_TOLERANCE,
    ) -> None:
        self.repository = repository
        self.calculator = calculator
        self.coordinator = coordinator
        self.pricing_provider = pricing_provider
        self.max_contractors_per_request = max_contractors_per_request
        self.submission_eligibility = submission_eligibility
        self.price_tolerance = price_tolerance

    # ========================================================================
    # CREATION AND CONTRACTOR SELECTION
    # ========================================================================

    def create(
        self,
        actor: Actor,
        system_size_kwp: Number,
        location: str,
        contractor_ids: Optional[Iterable[str]] = None,
        service_area: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> QuoteRequest:
        """
        Create a PENDING request and fan out assignments.

        Raises:
            AuthorizationError: If actor is not an end user
            ValidationFailureError: Non-positive size, blank location, duplicate ids
            BusinessRuleViolationError: Size outside rules, too many contractors
        """
        self._require_role(actor, ActorRole.USER)
        contractor_ids = list(contractor_ids or [])

        rules = self.pricing_provider.get_rules()
        size = self.calculator.validate_system_size(system_size_kwp, rules)

        if len(contractor_ids) > self.max_contractors_per_request:
            raise BusinessRuleViolationError(
                f"Maximum {self.max_contractors_per_request} contractors allowed per request",
                rule=RULE_TOO_MANY_CONTRACTORS,
                actual=len(contractor_ids),
                limit=self.max_contractors_per_request,
            )

        request = QuoteRequest(
            user_id=actor.actor_id,
            system_size_kwp=size,
            location=location,
            service_area=service_area,
            selected_contractors=contractor_ids,
            details=dict(details or {}),
        )
        self.repository.save_quote_request(request)
        self.coordinator.create_assignments(request.id, request.selected_contractors)

        logger.info(
            f"Quote request {request.id} created by {actor.actor_id} "
            f"({size} kWp, {len(contractor_ids)} contractors)"
        )
        return request

    def add_contractor(self, actor: Actor, request_id: str, contractor_id: str) -> QuoteRequest:
        """
        Add a contractor to an existing request (owner only).

        A pending/open request moves to contractors_selected.

        Raises:
            NotFoundError, AuthorizationError
            BusinessRuleViolationError: Terminal request, duplicate, cap reached
        """
        request = self._load_request(request_id)
        self._require_owner(actor, request)
        self._require_not_terminal(request)

        request.add_contractor(contractor_id, self.max_contractors_per_request)
        if request.status in (S.PENDING, S.OPEN):
            request.transition_to(S.CONTRACTORS_SELECTED)
        self.repository.save_quote_request(request)
        self.coordinator.create_assignments(request.id, [contractor_id])

        logger.info(f"Contractor {contractor_id} added to request {request_id}")
        return request

    def remove_contractor(self, actor: Actor, request_id: str, contractor_id: str) -> QuoteRequest:
        """
        Remove a contractor from the selection (owner only).

        The assignment record is kept for history.

        Raises:
            NotFoundError: Request missing or contractor not selected
            AuthorizationError, BusinessRuleViolationError (terminal request)
        """
        request = self._load_request(request_id)
        self._require_owner(actor, request)
        self._require_not_terminal(request)

        if not request.remove_contractor(contractor_id):
            raise NotFoundError(
                f"Contractor {contractor_id} is not assigned to request {request_id}",
                entity="ContractorAssignment",
                entity_id=f"{request_id}:{contractor_id}",
            )
        self.repository.save_quote_request(request)
        logger.info(f"Contractor {contractor_id} removed from request {request_id}")
        return request

    # ========================================================================
    # CONTRACTOR RESPONSES
    # ========================================================================

    def mark_viewed(self, actor: Actor, request_id: str) -> ContractorAssignment:
        self._require_role(actor, ActorRole.CONTRACTOR)
        self._load_request(request_id)
        return self.coordinator.mark_viewed(request_id, actor.actor_id)

    def contractor_respond(
        self,
        actor: Actor,
        request_id: str,
        decision: ResponseDecision,
        notes: Optional[str] = None,
    ) -> tuple[ContractorAssignment, QuoteRequestStatus]:
        """
        Record the calling contractor's accept/reject answer.

        Returns:
            (updated assignment, resulting request status)

        Raises:
            AuthorizationError: Actor is not a contractor
            NotFoundError: Request or assignment missing
            BusinessRuleViolationError: Request is terminal, or assignment
                already answered (INVALID_ASSIGNMENT_STATUS)
        """
        self._require_role(actor, ActorRole.CONTRACTOR)
        request = self._load_request(request_id)
        if request.is_terminal:
            raise BusinessRuleViolationError(
                f"Request {request_id} is {request.status.value} and no longer accepts responses",
                rule=RULE_INVALID_REQUEST_STATUS,
                actual=request.status.value,
            )

        assignment = self.coordinator.record_response(request_id, actor.actor_id, decision, notes)
        status = self._load_request(request_id).status
        return assignment, status

    # ========================================================================
    # QUOTE SUBMISSION
    # ========================================================================

    def submit_quote(
        self,
        actor: Actor,
        request_id: str,
        base_price: Number,
        price_per_kwp: Number,
        line_items: Optional[Iterable[LineItem]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> QuoteSubmission:
        """
        Validate, price and store a contractor's quote.

        Process Flow:
            1. Load request (NotFound)
            2. Request status must accept submissions (INVALID_REQUEST_STATUS)
            3. Contractor must be eligible (NOT_ASSIGNED)
            4. Validate prices against current rules
            5. base_price ~ price_per_kwp * size, and = sum of line items
            6. Reject a second quote from the same contractor (Conflict)
            7. Compute breakdown, VAT per line item, insert atomically
            8. First quote moves the request to quotes_received

        Raises:
            AuthorizationError, NotFoundError, ValidationFailureError,
            BusinessRuleViolationError, ConflictError
        """
        self._require_role(actor, ActorRole.CONTRACTOR)
        contractor_id = actor.actor_id
        request = self._load_request(request_id)

        submittable = self._submittable_statuses()
        if request.status not in submittable:
            raise BusinessRuleViolationError(
                f"Cannot submit quote for request in '{request.status.value}' status",
                rule=RULE_INVALID_REQUEST_STATUS,
                actual=request.status.value,
                limit=sorted(s.value for s in submittable),
            )

        self._require_eligible(request, contractor_id)

        items = list(line_items or [])
        rules = self.pricing_provider.get_rules()
        self.calculator.validate(base_price, price_per_kwp, request.system_size_kwp, rules)
        self.calculator.check_price_consistency(
            base_price, price_per_kwp, request.system_size_kwp, self.price_tolerance
        )
        self.calculator.check_line_item_total(base_price, items, self.price_tolerance)

        existing = self.repository.find_quote_by_request_and_contractor(request_id, contractor_id)
        if existing is not None:
            # storage uniqueness is the final guard; this only fails fast
            raise ConflictError(
                "You have already submitted a quote for this request",
                request_id=request_id,
                contractor_id=contractor_id,
            )

        breakdown = self.calculator.calculate(
            base_price, price_per_kwp, request.system_size_kwp, rules
        )
        priced_items = self.calculator.apply_line_item_vat(items, rules.vat_rate_percent)
        quote = ContractorQuote.from_breakdown(
            request_id, contractor_id, breakdown, priced_items, details
        )
        self.repository.insert_quote_with_line_items(quote)

        status = self._on_quote_submitted(request_id)
        totals = self.calculator.aggregate_line_items(quote.line_items, rules.vat_rate_percent)

        logger.info(
            f"Quote {quote.id} submitted by {contractor_id} for request {request_id}: "
            f"base={breakdown.base_price}, user_price={breakdown.total_user_price}, "
            f"{len(quote.line_items)} line items"
        )
        return QuoteSubmission(quote=quote, breakdown=breakdown, totals=totals, request_status=status)

    # ========================================================================
    # ADMIN REVIEW
    # ========================================================================

    def approve_quote(self, actor: Actor, quote_id: str, notes: Optional[str] = None) -> ContractorQuote:
        self._require_role(actor, ActorRole.ADMIN)
        quote = self._load_quote(quote_id)
        quote.approve(actor.actor_id, notes)
        self.repository.update_quote(quote)
        logger.info(f"Quote {quote_id} approved by {actor.actor_id}")
        return quote

    def reject_quote(
        self, actor: Actor, quote_id: str, reason: str, notes: Optional[str] = None
    ) -> ContractorQuote:
        self._require_role(actor, ActorRole.ADMIN)
        quote = self._load_quote(quote_id)
        quote.reject(actor.actor_id, reason, notes)
        self.repository.update_quote(quote)
        logger.info(f"Quote {quote_id} rejected by {actor.actor_id}: {reason}")
        return quote

    def request_quote_revision(
        self, actor: Actor, quote_id: str, notes: Optional[str] = None
    ) -> ContractorQuote:
        self._require_role(actor, ActorRole.ADMIN)
        quote = self._load_quote(quote_id)
        quote.request_revision(actor.actor_id, notes)
        self.repository.update_quote(quote)
        logger.info(f"Revision requested for quote {quote_id} by {actor.actor_id}")
        return quote

    # ========================================================================
    # SELECTION, COMPLETION, CANCELLATION
    # ========================================================================

    def select_quote(self, actor: Actor, request_id: str, quote_id: str) -> QuoteRequest:
        """
        Pick an approved quote as the winner (owner or admin).

        Raises:
            NotFoundError: Request missing, or quote missing / not on this request
            BusinessRuleViolationError: Quote not approved (QUOTE_NOT_APPROVED),
                request not in quotes_received / in-progress
        """
        request = self._load_request(request_id)
        self._require_owner_or_admin(actor, request)

        quote = self.repository.get_quote(quote_id)
        if quote is None or quote.request_id != request_id:
            raise NotFoundError(
                f"Quote {quote_id} not found for request {request_id}",
                entity="ContractorQuote",
                entity_id=quote_id,
            )
        if not quote.is_approved:
            raise BusinessRuleViolationError(
                "Only approved quotes can be selected",
                rule=RULE_QUOTE_NOT_APPROVED,
                actual=quote.admin_status.value,
            )
        if request.status not in SELECTABLE_STATUSES:
            raise BusinessRuleViolationError(
                f"Cannot select a quote for request in '{request.status.value}' status",
                rule=RULE_INVALID_REQUEST_STATUS,
                actual=request.status.value,
                limit=sorted(s.value for s in SELECTABLE_STATUSES),
            )

        request.transition_to(S.QUOTE_SELECTED)
        request.selected_quote_id = quote_id
        self.repository.save_quote_request(request)
        logger.info(f"Quote {quote_id} selected for request {request_id}")
        return request

    def complete(self, actor: Actor, request_id: str) -> QuoteRequest:
        """quote_selected -> completed (admin only)."""
        self._require_role(actor, ActorRole.ADMIN)
        request = self._load_request(request_id)
        self._require_transition(request, S.COMPLETED)
        request.transition_to(S.COMPLETED)
        self.repository.save_quote_request(request)
        logger.info(f"Request {request_id} completed")
        return request

    def cancel(self, actor: Actor, request_id: str, reason: Optional[str] = None) -> QuoteRequest:
        """
        Cancel a non-terminal request (owner or admin).

        Raises:
            NotFoundError, AuthorizationError
            BusinessRuleViolationError: INVALID_STATUS_TRANSITION if already terminal
        """
        request = self._load_request(request_id)
        self._require_owner_or_admin(actor, request)
        self._require_transition(request, S.CANCELLED)
        request.transition_to(S.CANCELLED)
        request.cancellation_reason = reason
        self.repository.save_quote_request(request)
        logger.info(f"Request {request_id} cancelled by {actor.actor_id}: {reason}")
        return request

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _on_quote_submitted(self, request_id: str) -> QuoteRequestStatus:
        """
        Move the request to quotes_received after a quote was stored.

        Re-reads the request so a concurrent change (e.g. cancellation) is
        not overwritten.
        """
        request = self._load_request(request_id)
        if request.status == S.QUOTES_RECEIVED:
            return request.status
        if request.can_transition_to(S.QUOTES_RECEIVED):
            request.transition_to(S.QUOTES_RECEIVED)
            self.repository.save_quote_request(request)
            logger.info(f"Request {request_id} moved to quotes_received")
        else:
            logger.warning(
                f"Quote stored but request {request_id} is now '{request.status.value}'; "
                f"status left unchanged"
            )
        return request.status

    def _submittable_statuses(self) -> frozenset[QuoteRequestStatus]:
        if self.submission_eligibility == SubmissionEligibility.ACCEPTED:
            return ACCEPTED_SUBMITTABLE_STATUSES
        return SUBMITTABLE_STATUSES

    def _require_eligible(self, request: QuoteRequest, contractor_id: str) -> None:
        # Selection is required in every mode; ACCEPTED adds the acceptance check.
        eligible = request.has_contractor(contractor_id)
        message = "You are not assigned to this quote request"
        if eligible and self.submission_eligibility == SubmissionEligibility.ACCEPTED:
            assignment = self.repository.find_assignment(request.id, contractor_id)
            eligible = assignment is not None and assignment.status == AssignmentStatus.ACCEPTED
            message = "You must accept this request before submitting a quote"

        if not eligible:
            raise BusinessRuleViolationError(
                message,
                rule=RULE_NOT_ASSIGNED,
                actual=contractor_id,
                details={"eligibility": self.submission_eligibility.value},
            )

    def _require_transition(self, request: QuoteRequest, target: QuoteRequestStatus) -> None:
        """Like transition_to() validation, but a repeat of a terminal move also fails."""
        if request.is_terminal or not request.can_transition_to(target):
            raise BusinessRuleViolationError(
                f"Cannot move quote request from '{request.status.value}' to '{target.value}'",
                rule=RULE_INVALID_STATUS_TRANSITION,
                actual=request.status.value,
                limit=target.value,
            )

    def _require_not_terminal(self, request: QuoteRequest) -> None:
        if request.is_terminal:
            raise BusinessRuleViolationError(
                f"Request {request.id} is {request.status.value}",
                rule=RULE_INVALID_REQUEST_STATUS,
                actual=request.status.value,
            )

    def _load_request(self, request_id: str) -> QuoteRequest:
        request = self.repository.get_quote_request(request_id)
        if request is None:
            raise NotFoundError(
                f"Quote request {request_id} not found", entity="QuoteRequest", entity_id=request_id
            )
        return request

    def _load_quote(self, quote_id: str) -> ContractorQuote:
        quote = self.repository.get_quote(quote_id)
        if quote is None:
            raise NotFoundError(f"Quote {quote_id} not found", entity="ContractorQuote", entity_id=quote_id)
        return quote

    @staticmethod
    def _require_role(actor: Actor, role: ActorRole) -> None:
        if actor.role != role:
            raise AuthorizationError(
                f"Action requires role '{role.value}'", actor_id=actor.actor_id, role=actor.role.value
            )

    @staticmethod
    def _require_owner(actor: Actor, request: QuoteRequest) -> None:
        if not actor.owns(request.user_id):
            raise AuthorizationError(
                "Only the request owner can perform this action",
                actor_id=actor.actor_id,
                role=actor.role.value,
            )

    @staticmethod
    def _require_owner_or_admin(actor: Actor, request: QuoteRequest) -> None:
        if not (actor.is_admin or actor.owns(request.user_id)):
            raise AuthorizationError(
                "Only the request owner or an admin can perform this action",
                actor_id=actor.actor_id,
                role=actor.role.value,
            )
