"""
Quoting Subdomain Module

Core business logic of the quote financial and assignment engine: pricing
rules, price validation and decomposition, the quote request state machine
and contractor assignment coordination.

Exports:
    Entities:
        - QuoteRequest, ContractorAssignment, ContractorQuote (+ status enums)

    Value Objects:
        - LineItem, FinancialBreakdown, QuotationTotals, Actor

    Services:
        - PricingConfigProvider, FinancialCalculator,
          AssignmentCoordinator, QuoteRequestLifecycle

    Repository Interfaces:
        - QuoteRepositoryProtocol, PricingRulesRepositoryProtocol,
          ContractorDirectoryProtocol

Usage:
    >>> from src.domain.quoting import QuoteRequest, FinancialCalculator
    >>> from src.domain.quoting.entities import QuoteRequestStatus
"""

from .constants import ActorRole, SubmissionEligibility
from .pricing_config import PricingRules

# Entities
from .entities import (
    AdminReviewStatus,
    AssignmentStatus,
    ContractorAssignment,
    ContractorQuote,
    QuoteRequest,
    QuoteRequestStatus,
    ResponseDecision,
)

# Value Objects
from .value_objects import Actor, FinancialBreakdown, LineItem, QuotationTotals

# Repository Interfaces
from .repositories import (
    ContractorDirectoryProtocol,
    ContractorInfo,
    PricingRulesRepositoryProtocol,
    QuoteRepositoryProtocol,
)

# Services
from .services import (
    AssignmentCoordinator,
    FinancialCalculator,
    PricingConfigProvider,
    QuoteRequestLifecycle,
    QuoteSubmission,
)

__all__ = [
    "ActorRole",
    "SubmissionEligibility",
    "PricingRules",
    # Entities
    "AdminReviewStatus",
    "AssignmentStatus",
    "ContractorAssignment",
    "ContractorQuote",
    "QuoteRequest",
    "QuoteRequestStatus",
    "ResponseDecision",
    # Value Objects
    "Actor",
    "FinancialBreakdown",
    "LineItem",
    "QuotationTotals",
    # Repository Interfaces
    "ContractorDirectoryProtocol",
    "ContractorInfo",
    "PricingRulesRepositoryProtocol",
    "QuoteRepositoryProtocol",
    # Services
    "AssignmentCoordinator",
    "FinancialCalculator",
    "PricingConfigProvider",
    "QuoteRequestLifecycle",
    "QuoteSubmission",
]
