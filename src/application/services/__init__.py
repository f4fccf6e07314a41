"""
Application Services

Responsibility:
    Orchestration services that coordinate domain services and
    infrastructure ports.

Contains:
    - QuoteEngineService: use-case facade for every exposed operation

Does NOT contain:
    - Domain business logic (use Domain services)
    - Direct infrastructure calls (use dependency injection)
"""

from src.application.services.quote_engine_service import QuoteEngineService

__all__ = ["QuoteEngineService"]
