"""
Redis Infrastructure Module

Redis-based pricing rules store and the shared connection pool.

Exports:
    - RedisPricingRulesRepository: PricingRulesRepositoryProtocol on Redis
    - RedisSettings: Connection settings from the environment
    - get_redis_client: Get Redis client with connection pooling
    - health_check: Check Redis health with PING test
    - close_connections: Close all Redis connections
"""

from .connection import RedisSettings, close_connections, get_redis_client, health_check
from .pricing_rules_repository import RedisPricingRulesRepository

__all__ = [
    "RedisPricingRulesRepository",
    "RedisSettings",
    "get_redis_client",
    "health_check",
    "close_connections",
]
