"""
In-Memory Persistence Module

Process-local implementations of the Domain persistence ports.

Exports:
    - InMemoryQuoteRepository: QuoteRepositoryProtocol
    - InMemoryPricingRulesRepository: PricingRulesRepositoryProtocol
"""

from .pricing_rules_repository import InMemoryPricingRulesRepository
from .quote_repository import InMemoryQuoteRepository

__all__ = [
    "InMemoryPricingRulesRepository",
    "InMemoryQuoteRepository",
]
