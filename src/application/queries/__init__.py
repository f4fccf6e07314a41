"""
Application Queries (CQRS Read Operations)

Contains:
    - GetQuoteRequestStatusQuery / Handler: request status view
    - ComputeFinancialsQuery / Handler: price preview
"""

from src.application.queries.compute_financials import (
    ComputeFinancialsQuery,
    ComputeFinancialsQueryHandler,
    FinancialsResult,
)
from src.application.queries.get_quote_request_status import (
    AssignmentStatusItem,
    GetQuoteRequestStatusQuery,
    GetQuoteRequestStatusQueryHandler,
    QuoteRequestStatusResult,
)

__all__ = [
    "AssignmentStatusItem",
    "ComputeFinancialsQuery",
    "ComputeFinancialsQueryHandler",
    "FinancialsResult",
    "GetQuoteRequestStatusQuery",
    "GetQuoteRequestStatusQueryHandler",
    "QuoteRequestStatusResult",
]
