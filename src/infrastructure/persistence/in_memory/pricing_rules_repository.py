"""
In-Memory Pricing Rules Repository

Process-local PricingRulesRepositoryProtocol implementation. Starts empty
(PricingConfigProvider then creates the default record) unless seeded.
"""

import threading
from typing import Optional

from src.domain.quoting.pricing_config import PricingRules


class InMemoryPricingRulesRepository:
    def __init__(self, rules: Optional[PricingRules] = None) -> None:
        self._rules = rules
        self._lock = threading.Lock()

    def load_pricing_rules(self) -> Optional[PricingRules]:
        with self._lock:
            return self._rules

    def save_pricing_rules(self, rules: PricingRules) -> None:
        with self._lock:
            self._rules = rules
