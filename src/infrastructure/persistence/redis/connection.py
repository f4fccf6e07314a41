"""
Redis Connection Pool Management.

Provides the shared Redis connection pool used by the Redis-backed pricing
rules store, plus a PING health check for the /health endpoint.

Responsibility:
    - Read Redis connection settings from the environment
    - Manage one process-wide connection pool (thread-safe singleton)
    - Verify connectivity with PING, retrying with exponential backoff
    - Close the pool on application shutdown

Architecture Notes:
    - Infrastructure Layer (external dependency on Redis)
    - Retries live here, never in the domain core
    - Callers translate RedisError into StorageFailureError

Environment Variables:
    REDIS_HOST             Hostname (default "localhost")
    REDIS_PORT             Port (default 6379)
    REDIS_DB               Database number (default 0)
    REDIS_MAX_CONNECTIONS  Pool size (default 10)
    REDIS_TIMEOUT          Socket/connect timeout in seconds (default 5)
    REDIS_RETRY_ATTEMPTS   PING attempts before giving up (default 3)

Examples:
    >>> client = get_redis_client()
    >>> client.get("quote_engine:pricing_rules")
    >>> health_check()
    True
    >>> close_connections()
"""

import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Optional

from redis import ConnectionPool, Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

logger = logging.getLogger(__name__)

BACKOFF_BASE_SECONDS = 1

# Singleton connection pool (thread-safe)
_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


@dataclass(frozen=True)
class RedisSettings:
    """
    Connection settings for the shared pool.

    Examples:
        >>> RedisSettings.from_env().port
        6379
        >>> RedisSettings(host="redis.internal", port=6380).to_pool_kwargs()["host"]
        'redis.internal'
    """

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    max_connections: int = 10
    timeout: int = 5
    retry_attempts: int = 3

    @classmethod
    def from_env(cls) -> "RedisSettings":
        return cls(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=int(os.getenv("REDIS_PORT", "6379")),
            db=int(os.getenv("REDIS_DB", "0")),
            max_connections=int(os.getenv("REDIS_MAX_CONNECTIONS", "10")),
            timeout=int(os.getenv("REDIS_TIMEOUT", "5")),
            retry_attempts=max(1, int(os.getenv("REDIS_RETRY_ATTEMPTS", "3"))),
        )

    def to_pool_kwargs(self) -> dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "db": self.db,
            "max_connections": self.max_connections,
            "socket_timeout": self.timeout,
            "socket_connect_timeout": self.timeout,
            "socket_keepalive": True,
            "decode_responses": True,
        }


def get_redis_client(settings: Optional[RedisSettings] = None) -> Redis:
    """
    Get a Redis client backed by the shared pool.

    The pool is created on first call (double-checked locking) and reused
    afterwards; settings passed on later calls are ignored until
    close_connections() resets the pool.

    Args:
        settings: Connection settings (default: RedisSettings.from_env())

    Returns:
        Redis client that answered PING

    Raises:
        RedisError: If PING fails on every retry attempt
    """
    global _redis_pool

    settings = settings or RedisSettings.from_env()

    if _redis_pool is None:
        with _pool_lock:
            if _redis_pool is None:
                logger.info(
                    f"Creating Redis connection pool: host={settings.host}, port={settings.port}, "
                    f"db={settings.db}, max_connections={settings.max_connections}, "
                    f"timeout={settings.timeout}s"
                )
                _redis_pool = ConnectionPool(**settings.to_pool_kwargs())

    client = Redis(connection_pool=_redis_pool)

    last_error: Optional[Exception] = None
    for attempt in range(settings.retry_attempts):
        try:
            client.ping()
            logger.debug(f"Redis connection established (attempt {attempt + 1})")
            return client
        except (ConnectionError, TimeoutError) as e:
            last_error = e
            if attempt < settings.retry_attempts - 1:
                delay = BACKOFF_BASE_SECONDS * (2**attempt)
                logger.warning(
                    f"Redis connection failed (attempt {attempt + 1}/{settings.retry_attempts}): "
                    f"{e}. Retrying in {delay}s..."
                )
                time.sleep(delay)
            else:
                logger.error(f"Redis connection failed after {settings.retry_attempts} attempts: {e}")

    raise RedisError(
        f"Failed to connect to Redis after {settings.retry_attempts} attempts. "
        f"Last error: {last_error}"
    )


def health_check() -> bool:
    """
    PING the shared pool.

    Returns:
        True if Redis answered, False otherwise (never raises)
    """
    try:
        if get_redis_client().ping():
            logger.debug("Redis health check: OK")
            return True
        logger.warning("Redis health check: PING returned False")
        return False
    except RedisError as e:
        logger.warning(f"Redis health check failed: {e}")
        return False


def close_connections() -> None:
    """Disconnect and drop the shared pool. Safe to call repeatedly."""
    global _redis_pool

    with _pool_lock:
        if _redis_pool is None:
            logger.debug("Redis connection pool already closed or not initialized")
            return
        logger.info("Closing Redis connection pool")
        try:
            _redis_pool.disconnect()
        except RedisError as e:
            logger.error(f"Error closing Redis connection pool: {e}")
        finally:
            _redis_pool = None
            logger.info("Redis connection pool closed")
