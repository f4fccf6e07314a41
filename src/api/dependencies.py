"""
API Dependency Injection

Builds the process-wide QuoteEngineService from settings and resolves the
caller's identity from request headers.

Architecture Notes:
    - Adapters are chosen from QuoteEngineSettings (PRICING_STORE)
    - The service is cached (functools.lru_cache) so every request shares
      one repository and one pricing cache
    - Tests replace get_quote_engine_service / get_actor through
      app.dependency_overrides

Identity:
    X-User-Id    Authenticated caller id (set by the upstream gateway)
    X-User-Role  "user", "contractor" or "admin"
    This module performs no authentication; it trusts the gateway.
"""

import logging
from functools import lru_cache

from fastapi import Header

from src.application.services.quote_engine_service import QuoteEngineService
from src.domain.quoting.constants import ActorRole
from src.domain.quoting.repositories import PricingRulesRepositoryProtocol
from src.domain.quoting.value_objects import Actor
from src.domain.shared.exceptions import AuthorizationError
from src.infrastructure.contractors import InMemoryContractorDirectory
from src.infrastructure.persistence.in_memory import (
    InMemoryPricingRulesRepository,
    InMemoryQuoteRepository,
)
from src.infrastructure.persistence.redis import RedisPricingRulesRepository, close_connections
from src.shared.config import PRICING_STORE_REDIS, QuoteEngineSettings, get_settings

logger = logging.getLogger(__name__)


def build_pricing_repository(settings: QuoteEngineSettings) -> PricingRulesRepositoryProtocol:
    if settings.pricing_store == PRICING_STORE_REDIS:
        logger.info("Pricing rules stored in Redis")
        return RedisPricingRulesRepository()
    logger.info("Pricing rules stored in memory")
    return InMemoryPricingRulesRepository()


@lru_cache(maxsize=1)
def get_quote_engine_service() -> QuoteEngineService:
    """Process-wide service instance."""
    settings = get_settings()
    return QuoteEngineService.build(
        repository=InMemoryQuoteRepository(),
        pricing_repository=build_pricing_repository(settings),
        contractor_directory=InMemoryContractorDirectory(),
        settings=settings,
    )


def get_actor(
    x_user_id: str = Header(..., min_length=1, description="Authenticated caller id"),
    x_user_role: str = Header(..., description="Caller role: user, contractor or admin"),
) -> Actor:
    """
    Resolve the caller from gateway headers.

    Raises:
        AuthorizationError: Unknown role (403)
    """
    if not x_user_id.strip():
        raise AuthorizationError("Missing caller id", role=x_user_role)
    try:
        role = ActorRole(x_user_role.strip().lower())
    except ValueError:
        raise AuthorizationError(
            f"Unknown role '{x_user_role}'", actor_id=x_user_id, role=x_user_role
        ) from None
    return Actor(actor_id=x_user_id.strip(), role=role)


def shutdown_dependencies() -> None:
    """Drop the cached service and close the Redis pool."""
    get_quote_engine_service.cache_clear()
    close_connections()
