"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface for the quote engine. Handles requests, responses and
    identity headers. No business logic.

Contains:
    - FastAPI routers (quote requests, quotes, pricing)
    - Dependency injection setup
    - Middleware configuration (CORS, logging)
    - Domain exception to HTTP status mapping

Does NOT contain:
    - Business logic (belongs to Domain layer)
    - Orchestration (belongs to Application layer)
    - Storage operations (belongs to Infrastructure layer)
"""
