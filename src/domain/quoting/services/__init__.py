"""
Quoting Domain Services.

Leaf-first:
    - PricingConfigProvider: current pricing rules with default fallback
    - FinancialCalculator: price validation and financial decomposition
    - AssignmentCoordinator: assignment fan-out and derived request status
    - QuoteRequestLifecycle: business-triggered request transitions and guards
"""

from src.domain.quoting.services.pricing_config_provider import PricingConfigProvider
from src.domain.quoting.services.financial_calculator import FinancialCalculator
from src.domain.quoting.services.assignment_coordinator import (
    AssignmentCoordinator,
    derive_request_status,
)
from src.domain.quoting.services.quote_request_lifecycle import (
    SUBMITTABLE_STATUSES,
    QuoteRequestLifecycle,
    QuoteSubmission,
)

__all__ = [
    "AssignmentCoordinator",
    "FinancialCalculator",
    "PricingConfigProvider",
    "QuoteRequestLifecycle",
    "QuoteSubmission",
    "SUBMITTABLE_STATUSES",
    "derive_request_status",
]
