"""
Infrastructure Layer - External Dependencies

Implements the ports the Domain Layer defines.

Architecture:
    - Implements Domain repository interfaces (Dependency Inversion)
    - Depends on external libraries (Redis)
    - No Domain business logic (only technical implementations)

Modules:
    - persistence: in-memory quote store, in-memory and Redis pricing rules stores
    - contractors: contractor directory lookup

Usage:
    >>> from src.infrastructure import InMemoryQuoteRepository, RedisPricingRulesRepository
"""

from .contractors import InMemoryContractorDirectory
from .persistence import (
    InMemoryPricingRulesRepository,
    InMemoryQuoteRepository,
    RedisPricingRulesRepository,
)

__all__ = [
    "InMemoryContractorDirectory",
    "InMemoryPricingRulesRepository",
    "InMemoryQuoteRepository",
    "RedisPricingRulesRepository",
]
