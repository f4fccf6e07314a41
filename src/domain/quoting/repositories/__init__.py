"""
Quoting Repository Interfaces (ports).

Defined in the Domain Layer, implemented in src/infrastructure.
"""

from .contractor_directory import ContractorDirectoryProtocol, ContractorInfo
from .pricing_rules_repository import PricingRulesRepositoryProtocol
from .quote_repository import QuoteRepositoryProtocol

__all__ = [
    "ContractorDirectoryProtocol",
    "ContractorInfo",
    "PricingRulesRepositoryProtocol",
    "QuoteRepositoryProtocol",
]
