"""
API Routers Package

Contains all FastAPI routers grouped by functionality.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Routers are thin wrappers around QuoteEngineService
    - All routers follow dependency injection pattern (src/api/dependencies.py)

Available Routers:
    - quote_requests: request lifecycle, contractor actions, quote submission
    - quotes: admin review of submitted quotes
    - pricing: price preview and pricing rules
"""

from .pricing import router as pricing_router
from .quote_requests import router as quote_requests_router
from .quotes import router as quotes_router

__all__ = ["pricing_router", "quote_requests_router", "quotes_router"]
