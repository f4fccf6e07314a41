"""
Tests for PricingConfigProvider domain service.

Covers:
- Lazy load and default record creation
- Fallback to defaults on store failure (never raises on read), held for fallback_ttl_seconds
- Cache TTL and invalidate()
- update_rules() merge, persistence and error propagation
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from src.domain.quoting.pricing_config import PricingRules
from src.domain.quoting.services import PricingConfigProvider
from src.domain.shared.exceptions import StorageFailureError, ValidationFailureError
from src.infrastructure.persistence.in_memory import InMemoryPricingRulesRepository


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def failing_repository() -> Mock:
    repository = Mock()
    repository.load_pricing_rules.side_effect = StorageFailureError(
        "Failed to read pricing rules", operation="load_pricing_rules"
    )
    return repository


# ============================================================================
# TESTS - get_rules()
# ============================================================================


def test_get_rules_without_repository_returns_defaults():
    """Test a provider without store serves default rules."""
    provider = PricingConfigProvider()

    assert provider.get_rules() == PricingRules.default()


def test_get_rules_returns_stored_rules():
    """Test stored rules are returned as-is."""
    stored = PricingRules.for_testing(platform_commission_percent=12)
    provider = PricingConfigProvider(InMemoryPricingRulesRepository(stored))

    assert provider.get_rules().platform_commission_percent == Decimal("12")


def test_get_rules_creates_default_record_when_store_is_empty():
    """Test first read persists the default record."""
    repository = InMemoryPricingRulesRepository()
    provider = PricingConfigProvider(repository)

    rules = provider.get_rules()

    assert rules == PricingRules.default()
    assert repository.load_pricing_rules() == PricingRules.default()


def test_get_rules_falls_back_to_defaults_on_store_failure(failing_repository, caplog):
    """Test store failure is logged and defaults are returned."""
    provider = PricingConfigProvider(failing_repository)

    rules = provider.get_rules()

    assert rules == PricingRules.default()
    assert "Pricing rules store unavailable" in caplog.text


def test_get_rules_falls_back_on_unreadable_record():
    """Test a stored record breaking invariants falls back to defaults."""
    repository = Mock()
    repository.load_pricing_rules.side_effect = ValidationFailureError("bad record")
    provider = PricingConfigProvider(repository)

    assert provider.get_rules() == PricingRules.default()


def test_fallback_is_not_cached(failing_repository):
    """Test the next call retries the store after a failure."""
    provider = PricingConfigProvider(failing_repository)

    provider.get_rules()
    failing_repository.load_pricing_rules.side_effect = None
    failing_repository.load_pricing_rules.return_value = PricingRules.for_testing(vat_rate_percent=5)

    assert provider.get_rules().vat_rate_percent == Decimal("5")
    assert failing_repository.load_pricing_rules.call_count == 2


def test_fallback_is_held_for_fallback_ttl(failing_repository, clock):
    """Test an outage hits the store once per fallback interval, not once per call."""
    provider = PricingConfigProvider(failing_repository, fallback_ttl_seconds=5, clock=clock)

    provider.get_rules()
    clock.advance(4)
    assert provider.get_rules() == PricingRules.default()
    assert failing_repository.load_pricing_rules.call_count == 1

    failing_repository.load_pricing_rules.side_effect = None
    failing_repository.load_pricing_rules.return_value = PricingRules.for_testing(vat_rate_percent=5)
    clock.advance(1)

    assert provider.get_rules().vat_rate_percent == Decimal("5")
    assert failing_repository.load_pricing_rules.call_count == 2


def test_invalidate_ends_fallback_hold(failing_repository, clock):
    """Test invalidate() retries the store immediately after a failure."""
    provider = PricingConfigProvider(failing_repository, fallback_ttl_seconds=5, clock=clock)
    provider.get_rules()

    provider.invalidate()
    provider.get_rules()

    assert failing_repository.load_pricing_rules.call_count == 2


def test_default_record_save_failure_still_returns_defaults():
    """Test failing to persist the default record does not raise."""
    repository = Mock()
    repository.load_pricing_rules.return_value = None
    repository.save_pricing_rules.side_effect = StorageFailureError("write failed")
    provider = PricingConfigProvider(repository)

    assert provider.get_rules() == PricingRules.default()


# ============================================================================
# TESTS - CACHING
# ============================================================================


def test_rules_are_cached_within_ttl(clock):
    """Test repeated reads inside the TTL hit the store once."""
    repository = Mock()
    repository.load_pricing_rules.return_value = PricingRules.default()
    provider = PricingConfigProvider(repository, cache_ttl_seconds=60, clock=clock)

    provider.get_rules()
    clock.advance(59)
    provider.get_rules()

    assert repository.load_pricing_rules.call_count == 1


def test_rules_are_reloaded_after_ttl(clock):
    """Test an expired cache reads the store again."""
    repository = Mock()
    repository.load_pricing_rules.return_value = PricingRules.default()
    provider = PricingConfigProvider(repository, cache_ttl_seconds=60, clock=clock)

    provider.get_rules()
    clock.advance(60)
    provider.get_rules()

    assert repository.load_pricing_rules.call_count == 2


def test_zero_ttl_disables_cache(clock):
    """Test cache_ttl_seconds=0 reads the store on every call."""
    repository = Mock()
    repository.load_pricing_rules.return_value = PricingRules.default()
    provider = PricingConfigProvider(repository, cache_ttl_seconds=0, clock=clock)

    provider.get_rules()
    provider.get_rules()

    assert repository.load_pricing_rules.call_count == 2


def test_invalidate_forces_reload(clock):
    """Test invalidate() drops cached rules."""
    repository = InMemoryPricingRulesRepository(PricingRules.default())
    provider = PricingConfigProvider(repository, cache_ttl_seconds=300, clock=clock)
    provider.get_rules()

    repository.save_pricing_rules(PricingRules.for_testing(max_price_per_kwp=2500))
    assert provider.get_rules().max_price_per_kwp == Decimal("2000")

    provider.invalidate()
    assert provider.get_rules().max_price_per_kwp == Decimal("2500")


# ============================================================================
# TESTS - update_rules()
# ============================================================================


def test_update_rules_merges_and_persists():
    """Test partial changes are merged over stored rules and saved."""
    repository = InMemoryPricingRulesRepository(PricingRules.for_testing(vat_rate_percent=5))
    provider = PricingConfigProvider(repository)

    updated = provider.update_rules({"platform_markup_percent": Decimal("12")})

    assert updated.platform_markup_percent == Decimal("12")
    assert updated.vat_rate_percent == Decimal("5")
    assert repository.load_pricing_rules() == updated


def test_update_rules_refreshes_cache(clock):
    """Test get_rules() returns the new rules right after an update."""
    provider = PricingConfigProvider(
        InMemoryPricingRulesRepository(), cache_ttl_seconds=300, clock=clock
    )
    provider.get_rules()

    provider.update_rules({"max_price_per_kwp": 1800})

    assert provider.get_rules().max_price_per_kwp == Decimal("1800")


def test_update_rules_rejects_invalid_result():
    """Test invalid merged rules raise and nothing is saved."""
    repository = InMemoryPricingRulesRepository(PricingRules.default())
    provider = PricingConfigProvider(repository)

    with pytest.raises(ValidationFailureError):
        provider.update_rules({"min_system_size_kwp": 500})

    assert repository.load_pricing_rules() == PricingRules.default()


def test_update_rules_propagates_store_failure(failing_repository):
    """Test the admin write path surfaces storage failures."""
    provider = PricingConfigProvider(failing_repository)

    with pytest.raises(StorageFailureError):
        provider.update_rules({"vat_rate_percent": 5})
