"""
ComputeFinancialsQuery - CQRS Read Query

Price preview: validates a (base price, price per kWp, system size) triple
against the current pricing rules (optionally with partial overrides) and
returns the financial breakdown. With line items, also returns the
quotation totals including VAT.

Architecture Notes:
    - Read-only: nothing is persisted
    - Delegates all arithmetic to FinancialCalculator
"""

import logging
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.application.commands.submit_quote import LineItemInput
from src.application.models import PricingRulesResult
from src.domain.quoting.services import FinancialCalculator
from src.domain.quoting.value_objects import FinancialBreakdown, QuotationTotals
from src.domain.quoting.value_objects.money import coerce_decimal

logger = logging.getLogger(__name__)


class ComputeFinancialsQuery(BaseModel):
    """
    Attributes:
        base_price: Contractor's total price
        price_per_kwp: Contractor's price per kWp
        system_size_kwp: System capacity in kWp
        overrides: Partial pricing rules merged over the current rules
        line_items: Optional rows to aggregate (VAT from the effective rules)

    Examples:
        >>> query = ComputeFinancialsQuery(base_price=10000, price_per_kwp=1000, system_size_kwp=10)
    """

    base_price: Decimal
    price_per_kwp: Decimal
    system_size_kwp: Decimal
    overrides: Optional[dict[str, Decimal]] = None
    line_items: list[LineItemInput] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("base_price", "price_per_kwp", "system_size_kwp", mode="before")
    @classmethod
    def coerce_numbers(cls, value):
        return coerce_decimal(value)


class FinancialsResult(BaseModel):
    """Breakdown, optional line item totals and the rules that produced them."""

    breakdown: FinancialBreakdown
    totals: Optional[QuotationTotals] = None
    rules: PricingRulesResult


class ComputeFinancialsQueryHandler:
    """
    Handler for price previews.

    Usage:
        handler = ComputeFinancialsQueryHandler(calculator)
        result = handler.handle(query)
    """

    def __init__(self, calculator: FinancialCalculator) -> None:
        self.calculator = calculator

    def handle(self, query: ComputeFinancialsQuery) -> FinancialsResult:
        """
        Raises:
            ValidationFailureError: Non-positive input, bad overrides
            BusinessRuleViolationError: Input breaks a pricing rule or the
                line items do not add up to the base price
        """
        rules = self.calculator.current_rules(query.overrides)
        self.calculator.validate(query.base_price, query.price_per_kwp, query.system_size_kwp, rules)
        breakdown = self.calculator.calculate(
            query.base_price, query.price_per_kwp, query.system_size_kwp, rules
        )

        totals = None
        if query.line_items:
            items = [item.to_line_item(index) for index, item in enumerate(query.line_items, start=1)]
            self.calculator.check_line_item_total(query.base_price, items)
            totals = self.calculator.aggregate_line_items(items, rules.vat_rate_percent)

        return FinancialsResult(
            breakdown=breakdown, totals=totals, rules=PricingRulesResult.from_rules(rules)
        )
