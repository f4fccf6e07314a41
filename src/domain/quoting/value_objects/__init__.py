"""
Quoting Value Objects.

Value Objects are immutable objects that represent domain concepts by their value,
not by their identity.

Available Value Objects:
    - LineItem: One priced row of a detailed quotation
    - FinancialBreakdown: Markup/commission/net decomposition of a base price
    - QuotationTotals: Aggregate sums across line items
    - Actor: Authenticated caller (identity port)
"""

from src.domain.quoting.value_objects.actor import Actor
from src.domain.quoting.value_objects.financial_breakdown import FinancialBreakdown
from src.domain.quoting.value_objects.line_item import LineItem
from src.domain.quoting.value_objects.money import ZERO, round_money
from src.domain.quoting.value_objects.quotation_totals import QuotationTotals

__all__ = [
    "Actor",
    "FinancialBreakdown",
    "LineItem",
    "QuotationTotals",
    "ZERO",
    "round_money",
]
