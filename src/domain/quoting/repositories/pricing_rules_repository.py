"""
PricingRulesRepository Interface

Configuration store port for PricingRules. Read-mostly; written by the admin
write path only.
"""

from typing import Optional, Protocol

from ..pricing_config import PricingRules


class PricingRulesRepositoryProtocol(Protocol):
    """
    Contract for the pricing rules store.

    Implementations raise StorageFailureError when the store is unreachable.
    PricingConfigProvider absorbs those failures on read.
    """

    def load_pricing_rules(self) -> Optional[PricingRules]:
        """Return the stored rules, or None if no record exists yet."""
        ...

    def save_pricing_rules(self, rules: PricingRules) -> None:
        """Create or overwrite the rules record."""
        ...
