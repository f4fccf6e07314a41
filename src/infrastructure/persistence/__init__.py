"""
Persistence Infrastructure Module

Data persistence implementations (in-memory, Redis).

Exports:
    From in_memory:
        - InMemoryQuoteRepository
        - InMemoryPricingRulesRepository

    From redis:
        - RedisPricingRulesRepository
"""

from .in_memory import InMemoryPricingRulesRepository, InMemoryQuoteRepository
from .redis import RedisPricingRulesRepository

__all__ = [
    "InMemoryQuoteRepository",
    "InMemoryPricingRulesRepository",
    "RedisPricingRulesRepository",
]
