"""
PricingConfigProvider - Domain Service

Supplies the current PricingRules to the rest of the quoting engine.

Architecture Notes:
    - Leaf service: depends only on PricingRulesRepositoryProtocol
    - Lazily loads rules on first use and caches them for cache_ttl_seconds
    - Creates the default record on first read when the store has none

Business Rules:
    - Read failures never reach the caller: they are logged and the
      hard-coded defaults are returned (pricing never blocks submission)
    - The fallback is held for fallback_ttl_seconds (0 = not held), so an
      outage costs one store round trip per interval instead of one per call
    - Writes (update_rules) are an admin path and DO raise on failure

Design Risk:
    A store outage silently reverts pricing to defaults. The ERROR log line
    "Pricing rules store unavailable" is the signal to alert on.
"""

import logging
import threading
import time
from typing import Any, Callable, Mapping, Optional

from src.domain.quoting.pricing_config import PricingRules
from src.domain.quoting.repositories.pricing_rules_repository import (
    PricingRulesRepositoryProtocol,
)
from src.domain.shared.exceptions import StorageFailureError, ValidationFailureError

logger = logging.getLogger(__name__)


class PricingConfigProvider:
    """
    Cached access to pricing rules with default fallback.

    Attributes:
        repository: Pricing rules store (None means "defaults only")
        cache_ttl_seconds: How long loaded rules are reused (0 disables caching)
        fallback_ttl_seconds: How long defaults are served after a read failure
            before the store is tried again (0 retries on every call)

    Examples:
        >>> provider = PricingConfigProvider(InMemoryPricingRulesRepository())
        >>> provider.get_rules().platform_commission_percent
        Decimal('15')
    """

    def __init__(
        self,
        repository: Optional[PricingRulesRepositoryProtocol] = None,
        cache_ttl_seconds: float = 300.0,
        fallback_ttl_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.repository = repository
        self.cache_ttl_seconds = cache_ttl_seconds
        self.fallback_ttl_seconds = fallback_ttl_seconds
        self._clock = clock
        self._cached: Optional[PricingRules] = None
        self._loaded_at: float = 0.0
        self._fallback_until: Optional[float] = None
        self._lock = threading.Lock()

    def get_rules(self) -> PricingRules:
        """
        Return current rules, falling back to defaults.

        Process Flow:
            1. Return cached rules if still fresh
            2. Load from store; if no record, persist and use defaults
            3. On any store failure, log and return defaults, held for
               fallback_ttl_seconds

        Returns:
            PricingRules (never raises on store failure)
        """
        with self._lock:
            if self._cached is not None and not self._expired():
                return self._cached

            if self._fallback_until is not None:
                if self._clock() < self._fallback_until:
                    return PricingRules.default()
                self._fallback_until = None

            if self.repository is None:
                return self._remember(PricingRules.default())

            try:
                rules = self.repository.load_pricing_rules()
            except (StorageFailureError, ValidationFailureError) as e:
                logger.error(f"Pricing rules store unavailable, using defaults: {e}")
                if self.fallback_ttl_seconds > 0:
                    self._fallback_until = self._clock() + self.fallback_ttl_seconds
                return PricingRules.default()

            if rules is None:
                rules = PricingRules.default()
                logger.info("No pricing rules record found, creating default record")
                try:
                    self.repository.save_pricing_rules(rules)
                except StorageFailureError as e:
                    logger.error(f"Could not persist default pricing rules: {e}")

            return self._remember(rules)

    def update_rules(self, changes: Mapping[str, Any]) -> PricingRules:
        """
        Merge partial changes over the stored rules and persist them.

        Args:
            changes: Field name -> new value (unknown fields are rejected)

        Returns:
            The new effective rules

        Raises:
            ValidationFailureError: If the merged rules break an invariant
            StorageFailureError: If the store cannot be read or written
        """
        with self._lock:
            current = None
            if self.repository is not None:
                current = self.repository.load_pricing_rules()
            updated = (current or PricingRules.default()).with_overrides(changes)
            if self.repository is not None:
                self.repository.save_pricing_rules(updated)
            logger.info(f"Pricing rules updated: {updated.to_dict()}")
            return self._remember(updated)

    def invalidate(self) -> None:
        """Drop cached rules; next get_rules() reads the store."""
        with self._lock:
            self._cached = None
            self._loaded_at = 0.0
            self._fallback_until = None

    def _expired(self) -> bool:
        return self._clock() - self._loaded_at >= self.cache_ttl_seconds

    def _remember(self, rules: PricingRules) -> PricingRules:
        self._cached = rules
        self._loaded_at = self._clock()
        self._fallback_until = None
        return rules
