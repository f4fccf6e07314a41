"""
Quote Engine Service - Application Orchestration

Responsibility:
    Single entry point for every exposed operation of the quote engine.
    Implements the Use Case pattern from Clean Architecture: takes plain
    commands plus the authenticated Actor, delegates to domain services,
    emits audit events and returns application DTOs.

Architecture Notes:
    - Part of Application Layer (Services/Use Cases)
    - Depends on Domain Layer services and repository protocols only;
      concrete adapters are injected by the API layer (dependencies.py)
    - Synchronous: each call is one unit of work for one inbound request
    - No HTTP handling (that's API Layer concern)

Contains:
    - QuoteEngineService: Use-case facade

Does NOT contain:
    - Domain business rules (delegated to QuoteRequestLifecycle,
      AssignmentCoordinator, FinancialCalculator, PricingConfigProvider)
    - Authentication (identity comes in as an already-verified Actor)
"""

import logging
from typing import Optional

from src.application.commands.contractor_respond import ContractorRespondCommand
from src.application.commands.create_quote_request import (
    AddContractorCommand,
    CancelQuoteRequestCommand,
    CreateQuoteRequestCommand,
    SelectQuoteCommand,
)
from src.application.commands.review_quote import (
    ApproveQuoteCommand,
    RejectQuoteCommand,
    RequestRevisionCommand,
)
from src.application.commands.submit_quote import SubmitQuoteCommand
from src.application.commands.update_pricing_rules import UpdatePricingRulesCommand
from src.application.models import (
    AssignmentResult,
    ContractorResponseResult,
    PricingRulesResult,
    QuoteRequestResult,
    QuoteResult,
    QuoteSubmissionResult,
)
from src.application.queries.compute_financials import (
    ComputeFinancialsQuery,
    ComputeFinancialsQueryHandler,
    FinancialsResult,
)
from src.application.queries.get_quote_request_status import (
    GetQuoteRequestStatusQuery,
    GetQuoteRequestStatusQueryHandler,
    QuoteRequestStatusResult,
)
from src.domain.quoting.constants import ActorRole
from src.domain.quoting.repositories import (
    ContractorDirectoryProtocol,
    PricingRulesRepositoryProtocol,
    QuoteRepositoryProtocol,
)
from src.domain.quoting.services import (
    AssignmentCoordinator,
    FinancialCalculator,
    PricingConfigProvider,
    QuoteRequestLifecycle,
)
from src.domain.quoting.value_objects import Actor
from src.domain.shared.exceptions import AuthorizationError
from src.shared.config import QuoteEngineSettings
from src.shared.utils.audit import audit_event

logger = logging.getLogger(__name__)


class QuoteEngineService:
    """
    Use-case facade of the quote engine.

    Attributes:
        repository: Quote persistence port
        pricing_provider: Cached pricing rules
        calculator: FinancialCalculator
        coordinator: AssignmentCoordinator
        lifecycle: QuoteRequestLifecycle
        status_handler: GetQuoteRequestStatusQueryHandler
        financials_handler: ComputeFinancialsQueryHandler

    Usage:
        >>> service = QuoteEngineService.build(repository, pricing_repository)
        >>> user = Actor(actor_id="user-1", role=ActorRole.USER)
        >>> request = service.create_quote_request(
        ...     user, CreateQuoteRequestCommand(system_size_kwp=10, location="Riyadh")
        ... )
        >>> request.status
        <QuoteRequestStatus.PENDING: 'pending'>
    """

    def __init__(
        self,
        repository: QuoteRepositoryProtocol,
        pricing_provider: PricingConfigProvider,
        lifecycle: QuoteRequestLifecycle,
        contractor_directory: Optional[ContractorDirectoryProtocol] = None,
    ) -> None:
        self.repository = repository
        self.pricing_provider = pricing_provider
        self.lifecycle = lifecycle
        self.calculator = lifecycle.calculator
        self.coordinator = lifecycle.coordinator
        self.status_handler = GetQuoteRequestStatusQueryHandler(repository, contractor_directory)
        self.financials_handler = ComputeFinancialsQueryHandler(self.calculator)

    @classmethod
    def build(
        cls,
        repository: QuoteRepositoryProtocol,
        pricing_repository: Optional[PricingRulesRepositoryProtocol] = None,
        contractor_directory: Optional[ContractorDirectoryProtocol] = None,
        settings: Optional[QuoteEngineSettings] = None,
    ) -> "QuoteEngineService":
        """
        Wire the domain services from ports and settings.

        Args:
            repository: Quote persistence adapter
            pricing_repository: Pricing rules store (None = defaults only)
            contractor_directory: Contractor lookup (None = no enrichment)
            settings: Engine settings (defaults when omitted)
        """
        settings = settings or QuoteEngineSettings()
        provider = PricingConfigProvider(
            pricing_repository,
            cache_ttl_seconds=settings.pricing_cache_ttl_seconds,
            fallback_ttl_seconds=settings.pricing_fallback_ttl_seconds,
        )
        calculator = FinancialCalculator(provider)
        coordinator = AssignmentCoordinator(repository)
        lifecycle = QuoteRequestLifecycle(
            repository,
            calculator,
            coordinator,
            provider,
            max_contractors_per_request=settings.max_contractors_per_request,
            submission_eligibility=settings.submission_eligibility,
            price_tolerance=settings.price_tolerance,
        )
        logger.info(f"Quote engine service built with settings {settings.to_dict()}")
        return cls(repository, provider, lifecycle, contractor_directory)

    # ========================================================================
    # QUOTE REQUESTS
    # ========================================================================

    def create_quote_request(
        self, actor: Actor, command: CreateQuoteRequestCommand
    ) -> QuoteRequestResult:
        request = self.lifecycle.create(
            actor,
            system_size_kwp=command.system_size_kwp,
            location=command.location,
            contractor_ids=command.contractor_ids,
            service_area=command.service_area,
            details=command.details(),
        )
        audit_event(
            "QUOTE_REQUEST_CREATED",
            request_id=request.id,
            user_id=actor.actor_id,
            system_size_kwp=request.system_size_kwp,
            contractor_count=len(request.selected_contractors),
        )
        return QuoteRequestResult.from_entity(request)

    def add_contractor(
        self, actor: Actor, request_id: str, command: AddContractorCommand
    ) -> QuoteRequestResult:
        request = self.lifecycle.add_contractor(actor, request_id, command.contractor_id)
        audit_event(
            "CONTRACTOR_ADDED_TO_REQUEST",
            request_id=request_id,
            contractor_id=command.contractor_id,
            user_id=actor.actor_id,
        )
        return QuoteRequestResult.from_entity(request)

    def remove_contractor(self, actor: Actor, request_id: str, contractor_id: str) -> QuoteRequestResult:
        request = self.lifecycle.remove_contractor(actor, request_id, contractor_id)
        audit_event(
            "CONTRACTOR_REMOVED_FROM_REQUEST",
            request_id=request_id,
            contractor_id=contractor_id,
            user_id=actor.actor_id,
        )
        return QuoteRequestResult.from_entity(request)

    def cancel_quote_request(
        self, actor: Actor, request_id: str, command: CancelQuoteRequestCommand
    ) -> QuoteRequestResult:
        request = self.lifecycle.cancel(actor, request_id, command.reason)
        audit_event(
            "QUOTE_REQUEST_CANCELLED",
            request_id=request_id,
            cancelled_by=actor.actor_id,
            role=actor.role.value,
            reason=command.reason,
        )
        return QuoteRequestResult.from_entity(request)

    def select_quote(self, actor: Actor, request_id: str, command: SelectQuoteCommand) -> QuoteRequestResult:
        request = self.lifecycle.select_quote(actor, request_id, command.quote_id)
        audit_event(
            "QUOTE_SELECTED", request_id=request_id, quote_id=command.quote_id, selected_by=actor.actor_id
        )
        return QuoteRequestResult.from_entity(request)

    def complete_quote_request(self, actor: Actor, request_id: str) -> QuoteRequestResult:
        request = self.lifecycle.complete(actor, request_id)
        audit_event("QUOTE_REQUEST_COMPLETED", request_id=request_id, admin_id=actor.actor_id)
        return QuoteRequestResult.from_entity(request)

    def get_quote_request_status(self, actor: Actor, request_id: str) -> QuoteRequestStatusResult:
        return self.status_handler.handle(GetQuoteRequestStatusQuery(request_id=request_id), actor)

    # ========================================================================
    # CONTRACTOR ACTIONS
    # ========================================================================

    def mark_assignment_viewed(self, actor: Actor, request_id: str) -> AssignmentResult:
        assignment = self.lifecycle.mark_viewed(actor, request_id)
        return AssignmentResult.from_entity(assignment)

    def contractor_respond(
        self, actor: Actor, request_id: str, command: ContractorRespondCommand
    ) -> ContractorResponseResult:
        assignment, status = self.lifecycle.contractor_respond(
            actor, request_id, command.decision, command.notes
        )
        audit_event(
            "CONTRACTOR_RESPONDED_TO_REQUEST",
            request_id=request_id,
            contractor_id=actor.actor_id,
            response=command.decision.value,
            request_status=status.value,
        )
        return ContractorResponseResult(
            assignment=AssignmentResult.from_entity(assignment), request_status=status
        )

    def submit_quote(
        self, actor: Actor, request_id: str, command: SubmitQuoteCommand
    ) -> QuoteSubmissionResult:
        submission = self.lifecycle.submit_quote(
            actor,
            request_id,
            base_price=command.base_price,
            price_per_kwp=command.price_per_kwp,
            line_items=command.to_line_items(),
            details=command.details(),
        )
        breakdown = submission.breakdown
        audit_event(
            "QUOTE_FINANCIAL_CALCULATION",
            request_id=request_id,
            contractor_id=actor.actor_id,
            base_price=breakdown.base_price,
            markup_amount=breakdown.markup_amount,
            commission_amount=breakdown.commission_amount,
            total_user_price=breakdown.total_user_price,
            contractor_net_amount=breakdown.contractor_net_amount,
            platform_revenue=breakdown.platform_revenue,
        )
        audit_event(
            "DETAILED_QUOTATION_SUBMITTED" if submission.quote.line_items else "CONTRACTOR_QUOTE_SUBMITTED",
            request_id=request_id,
            quote_id=submission.quote.id,
            contractor_id=actor.actor_id,
            line_item_count=len(submission.quote.line_items),
            total_payable=submission.totals.total_payable,
        )
        return QuoteSubmissionResult.from_submission(submission)

    # ========================================================================
    # ADMIN REVIEW
    # ========================================================================

    def approve_quote(self, actor: Actor, quote_id: str, command: ApproveQuoteCommand) -> QuoteResult:
        quote = self.lifecycle.approve_quote(actor, quote_id, command.notes)
        audit_event(
            "CONTRACTOR_QUOTE_APPROVED",
            quote_id=quote_id,
            request_id=quote.request_id,
            contractor_id=quote.contractor_id,
            admin_id=actor.actor_id,
        )
        return QuoteResult.from_entity(quote)

    def reject_quote(self, actor: Actor, quote_id: str, command: RejectQuoteCommand) -> QuoteResult:
        quote = self.lifecycle.reject_quote(actor, quote_id, command.reason, command.notes)
        audit_event(
            "CONTRACTOR_QUOTE_REJECTED",
            quote_id=quote_id,
            request_id=quote.request_id,
            contractor_id=quote.contractor_id,
            admin_id=actor.actor_id,
            reason=command.reason,
        )
        return QuoteResult.from_entity(quote)

    def request_quote_revision(
        self, actor: Actor, quote_id: str, command: RequestRevisionCommand
    ) -> QuoteResult:
        quote = self.lifecycle.request_quote_revision(actor, quote_id, command.notes)
        audit_event(
            "CONTRACTOR_QUOTE_REVISION_REQUESTED",
            quote_id=quote_id,
            request_id=quote.request_id,
            admin_id=actor.actor_id,
        )
        return QuoteResult.from_entity(quote)

    # ========================================================================
    # PRICING
    # ========================================================================

    def compute_financials(self, query: ComputeFinancialsQuery) -> FinancialsResult:
        return self.financials_handler.handle(query)

    def get_pricing_rules(self) -> PricingRulesResult:
        return PricingRulesResult.from_rules(self.pricing_provider.get_rules())

    def update_pricing_rules(
        self, actor: Actor, command: UpdatePricingRulesCommand
    ) -> PricingRulesResult:
        """
        Raises:
            AuthorizationError: Actor is not an admin
            ValidationFailureError: Merged rules break an invariant
            StorageFailureError: Rules store unavailable
        """
        if actor.role != ActorRole.ADMIN:
            raise AuthorizationError(
                "Action requires role 'admin'", actor_id=actor.actor_id, role=actor.role.value
            )
        rules = self.pricing_provider.update_rules(command.changes())
        audit_event("PRICING_RULES_UPDATED", admin_id=actor.actor_id, changes=command.changes())
        return PricingRulesResult.from_rules(rules)
