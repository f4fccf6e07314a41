"""
Shared Utilities

Responsibility:
    Cross-cutting concerns used across all layers.

Contains:
    - config: environment-driven settings (python-dotenv)
    - utils.audit: business audit logging

Does NOT contain:
    - Layer-specific code
    - Business logic
    - Infrastructure implementations
"""
