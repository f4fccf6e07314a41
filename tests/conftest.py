"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites (unit, integration).

Fixtures:
    - repository: Empty InMemoryQuoteRepository
    - pricing_repository: Empty InMemoryPricingRulesRepository
    - contractor_directory: Directory with two known contractors
    - service: QuoteEngineService wired with the in-memory adapters
    - user / other_user / contractor_a / contractor_b / outsider / admin: Actors
    - created_request: Pending request owned by `user` inviting both contractors

Architecture Notes:
    - Every fixture is function-scoped: each test gets fresh stores
    - No Redis or network access; Redis adapters are tested with mocks

Usage:
    def test_something(service, user):
        result = service.create_quote_request(user, CreateQuoteRequestCommand(...))
        assert result.status == QuoteRequestStatus.PENDING
"""

import logging

import pytest

from src.application.commands.create_quote_request import CreateQuoteRequestCommand
from src.application.services.quote_engine_service import QuoteEngineService
from src.domain.quoting.constants import ActorRole
from src.domain.quoting.repositories import ContractorInfo
from src.domain.quoting.value_objects import Actor
from src.infrastructure.contractors import InMemoryContractorDirectory
from src.infrastructure.persistence.in_memory import (
    InMemoryPricingRulesRepository,
    InMemoryQuoteRepository,
)
from src.shared.config import QuoteEngineSettings

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

CONTRACTOR_A = "contractor-a"
CONTRACTOR_B = "contractor-b"


# ============================================================================
# ACTOR FIXTURES
# ============================================================================


@pytest.fixture
def user() -> Actor:
    return Actor(actor_id="user-1", role=ActorRole.USER)


@pytest.fixture
def other_user() -> Actor:
    return Actor(actor_id="user-2", role=ActorRole.USER)


@pytest.fixture
def contractor_a() -> Actor:
    return Actor(actor_id=CONTRACTOR_A, role=ActorRole.CONTRACTOR)


@pytest.fixture
def contractor_b() -> Actor:
    return Actor(actor_id=CONTRACTOR_B, role=ActorRole.CONTRACTOR)


@pytest.fixture
def outsider() -> Actor:
    """Contractor never invited to any request."""
    return Actor(actor_id="contractor-z", role=ActorRole.CONTRACTOR)


@pytest.fixture
def admin() -> Actor:
    return Actor(actor_id="admin-1", role=ActorRole.ADMIN)


# ============================================================================
# ADAPTER FIXTURES
# ============================================================================


@pytest.fixture
def repository() -> InMemoryQuoteRepository:
    return InMemoryQuoteRepository()


@pytest.fixture
def pricing_repository() -> InMemoryPricingRulesRepository:
    return InMemoryPricingRulesRepository()


@pytest.fixture
def contractor_directory() -> InMemoryContractorDirectory:
    return InMemoryContractorDirectory(
        [
            ContractorInfo(
                contractor_id=CONTRACTOR_A,
                company_name="Sun Works LLC",
                contact_name="Alice",
                email="alice@sunworks.example",
            ),
            ContractorInfo(contractor_id=CONTRACTOR_B, company_name="Bright Roofs"),
        ]
    )


# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def settings() -> QuoteEngineSettings:
    """Defaults, ignoring the environment, with caching disabled."""
    return QuoteEngineSettings.for_testing(pricing_cache_ttl_seconds=0)


@pytest.fixture
def service(repository, pricing_repository, contractor_directory, settings) -> QuoteEngineService:
    return QuoteEngineService.build(
        repository=repository,
        pricing_repository=pricing_repository,
        contractor_directory=contractor_directory,
        settings=settings,
    )


@pytest.fixture
def created_request(service, user):
    """Pending 10 kWp request owned by `user`, inviting contractors A and B."""
    return service.create_quote_request(
        user,
        CreateQuoteRequestCommand(
            system_size_kwp=10,
            location="Riyadh, Al Olaya",
            contractor_ids=[CONTRACTOR_A, CONTRACTOR_B],
        ),
    )
