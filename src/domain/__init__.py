"""
Domain Layer - Core Business Logic

Heart of the quote engine. Contains all business rules, entities,
value objects, and domain services. Framework-independent and highly testable.

Architecture:
    - Clean Architecture: Domain Layer is the center, no outward dependencies
    - Domain-Driven Design: Entities, Value Objects, Services, Repositories
    - Dependency Inversion: Domain defines interfaces, Infrastructure implements

Subdomains:
    - quoting: quote requests, contractor assignments, quotes and pricing
    - shared: Cross-subdomain concepts (exceptions)

Usage:
    >>> from src.domain.quoting import QuoteRequest, FinancialCalculator
    >>> from src.domain.shared import DomainException
"""

from .shared import DomainException

__all__ = [
    "DomainException",
]
