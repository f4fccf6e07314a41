"""
Redis Pricing Rules Repository

Concrete implementation of PricingRulesRepositoryProtocol backed by a single
Redis string key holding the rules as JSON.

Storage Strategy:
    - Key: PRICING_RULES_KEY env var (default "quote_engine:pricing_rules")
    - Value: JSON of PricingRules.to_dict() (decimals as strings)
    - No TTL: the record lives until an admin overwrites it

Error Handling:
    - RedisError (connection, timeout, ...) -> StorageFailureError
    - Undecodable JSON or a non-object document -> StorageFailureError
    - Decodable but invalid rules -> ValidationFailureError (from PricingRules)
    PricingConfigProvider absorbs both on read.
"""

import json
import logging
import os
from typing import Optional

from redis import Redis
from redis.exceptions import RedisError

from src.domain.quoting.pricing_config import PricingRules
from src.domain.shared.exceptions import StorageFailureError
from src.infrastructure.persistence.redis.connection import get_redis_client

logger = logging.getLogger(__name__)

DEFAULT_PRICING_RULES_KEY = "quote_engine:pricing_rules"


class RedisPricingRulesRepository:
    """
    Redis-backed pricing rules store.

    Examples:
        >>> repo = RedisPricingRulesRepository()
        >>> repo.load_pricing_rules() is None   # fresh Redis
        True
        >>> repo.save_pricing_rules(PricingRules.default())
    """

    def __init__(self, client: Optional[Redis] = None, key: Optional[str] = None) -> None:
        """
        Args:
            client: Redis client (default: shared pool, connected lazily)
            key: Storage key (default from PRICING_RULES_KEY)
        """
        self._client = client
        self.key = key or os.getenv("PRICING_RULES_KEY", DEFAULT_PRICING_RULES_KEY)

    def load_pricing_rules(self) -> Optional[PricingRules]:
        try:
            raw = self._get_client("load_pricing_rules").get(self.key)
        except RedisError as e:
            raise StorageFailureError(
                "Failed to read pricing rules", operation="load_pricing_rules", original_error=e
            ) from e

        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageFailureError(
                f"Pricing rules record under '{self.key}' is not valid JSON",
                operation="load_pricing_rules",
                original_error=e,
            ) from e
        if not isinstance(data, dict):
            raise StorageFailureError(
                f"Pricing rules record under '{self.key}' is not a JSON object",
                operation="load_pricing_rules",
            )
        return PricingRules.from_dict(data)

    def save_pricing_rules(self, rules: PricingRules) -> None:
        payload = json.dumps(rules.to_dict(), sort_keys=True)
        try:
            self._get_client("save_pricing_rules").set(self.key, payload)
        except RedisError as e:
            raise StorageFailureError(
                "Failed to write pricing rules", operation="save_pricing_rules", original_error=e
            ) from e
        logger.info(f"Pricing rules saved to Redis key '{self.key}'")

    def _get_client(self, operation: str) -> Redis:
        if self._client is None:
            logger.debug(f"Connecting to Redis for {operation}")
            self._client = get_redis_client()
        return self._client
