"""
Shared Utilities

Responsibility:
    Generic utility functions used across the application.

Contains:
    - audit: business audit trail logger

Does NOT contain:
    - Domain-specific utilities (use Domain layer)
    - Infrastructure utilities (use Infrastructure layer)
"""
