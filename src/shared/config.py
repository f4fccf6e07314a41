"""
Application Settings

Environment-driven configuration for the quote engine. Values are read once
(after loading an optional .env file) and cached for the process lifetime.

Environment Variables:
    MAX_CONTRACTORS_PER_REQUEST   Cap on selected contractors (default 10)
    QUOTE_SUBMISSION_ELIGIBILITY  "selected" (default) or "accepted"
    PRICING_STORE                 "memory" (default) or "redis"
    PRICING_CACHE_TTL_SECONDS     Pricing rules cache lifetime (default 300)
    PRICE_TOLERANCE               Allowed base price mismatch (default 0.01)
    LOG_LEVEL                     Root log level for the API (default INFO)

Redis connection variables (REDIS_HOST, REDIS_PORT, ...) are read by
src/infrastructure/persistence/redis/connection.py.

Examples:
    >>> settings = get_settings()
    >>> settings.max_contractors_per_request
    10
    >>> get_settings.cache_clear()  # tests: re-read environment
"""

import logging
import os
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv

from src.domain.quoting.constants import (
    DEFAULT_MAX_CONTRACTORS_PER_REQUEST,
    PRICE_TOLERANCE,
    SubmissionEligibility,
)

logger = logging.getLogger(__name__)

PRICING_STORE_MEMORY = "memory"
PRICING_STORE_REDIS = "redis"


@dataclass(frozen=True)
class QuoteEngineSettings:
    """
    Immutable process configuration.

    Attributes:
        max_contractors_per_request: Cap on selected contractors per request
        submission_eligibility: Which precondition gates quote submission
        pricing_store: Backend for pricing rules ("memory" or "redis")
        pricing_cache_ttl_seconds: How long pricing rules are cached
        pricing_fallback_ttl_seconds: How long defaults are served after a
            pricing store failure before the store is retried
        price_tolerance: Allowed |base - ppk * size| gap
        log_level: Root logging level name
    """

    max_contractors_per_request: int = DEFAULT_MAX_CONTRACTORS_PER_REQUEST
    submission_eligibility: SubmissionEligibility = SubmissionEligibility.SELECTED
    pricing_store: str = PRICING_STORE_MEMORY
    pricing_cache_ttl_seconds: float = 300.0
    pricing_fallback_ttl_seconds: float = 5.0
    price_tolerance: Decimal = PRICE_TOLERANCE
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate ranges and enumerated values."""
        if self.max_contractors_per_request < 1:
            raise ValueError(
                f"MAX_CONTRACTORS_PER_REQUEST must be >= 1, got {self.max_contractors_per_request}"
            )
        if self.pricing_store not in (PRICING_STORE_MEMORY, PRICING_STORE_REDIS):
            raise ValueError(
                f"PRICING_STORE must be '{PRICING_STORE_MEMORY}' or '{PRICING_STORE_REDIS}', "
                f"got '{self.pricing_store}'"
            )
        if self.pricing_cache_ttl_seconds < 0:
            raise ValueError(
                f"PRICING_CACHE_TTL_SECONDS must be >= 0, got {self.pricing_cache_ttl_seconds}"
            )
        if self.pricing_fallback_ttl_seconds < 0:
            raise ValueError(
                "PRICING_FALLBACK_TTL_SECONDS must be >= 0, "
                f"got {self.pricing_fallback_ttl_seconds}"
            )
        if self.price_tolerance < 0:
            raise ValueError(f"PRICE_TOLERANCE must be >= 0, got {self.price_tolerance}")

    @classmethod
    def from_env(cls) -> "QuoteEngineSettings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: If a variable has an invalid value
        """
        return cls(
            max_contractors_per_request=int(
                os.getenv("MAX_CONTRACTORS_PER_REQUEST", str(DEFAULT_MAX_CONTRACTORS_PER_REQUEST))
            ),
            submission_eligibility=SubmissionEligibility(
                os.getenv("QUOTE_SUBMISSION_ELIGIBILITY", SubmissionEligibility.SELECTED.value).lower()
            ),
            pricing_store=os.getenv("PRICING_STORE", PRICING_STORE_MEMORY).lower(),
            pricing_cache_ttl_seconds=float(os.getenv("PRICING_CACHE_TTL_SECONDS", "300")),
            pricing_fallback_ttl_seconds=float(os.getenv("PRICING_FALLBACK_TTL_SECONDS", "5")),
            price_tolerance=Decimal(os.getenv("PRICE_TOLERANCE", str(PRICE_TOLERANCE))),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @classmethod
    def for_testing(cls, **overrides: Any) -> "QuoteEngineSettings":
        """Defaults (ignoring the environment) with explicit overrides."""
        return cls(**overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "max_contractors_per_request": self.max_contractors_per_request,
            "submission_eligibility": self.submission_eligibility.value,
            "pricing_store": self.pricing_store,
            "pricing_cache_ttl_seconds": self.pricing_cache_ttl_seconds,
            "pricing_fallback_ttl_seconds": self.pricing_fallback_ttl_seconds,
            "price_tolerance": str(self.price_tolerance),
            "log_level": self.log_level,
        }


@lru_cache(maxsize=1)
def get_settings() -> QuoteEngineSettings:
    """
    Load .env (if present) and return process-wide settings.

    Cached; call get_settings.cache_clear() to re-read the environment.
    """
    load_dotenv()
    settings = QuoteEngineSettings.from_env()
    logger.info(f"Quote engine settings loaded: {settings.to_dict()}")
    return settings
