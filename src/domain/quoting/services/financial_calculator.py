"""
FinancialCalculator - Domain Service

Validates contractor price submissions against PricingRules and derives the
platform's financial decomposition of a quote.

Architecture Notes:
    - Pure domain service: validate(), calculate() and aggregate_line_items()
      take every input explicitly and have no side effects
    - Depends on PricingConfigProvider only for the convenience entry points
      that need "current rules" (compute(), current_rules())
    - Decimal arithmetic throughout

Business Rules:
    - markup      = base * markup% / 100
    - user price  = base + markup
    - commission  = base * commission% / 100
    - net payout  = base - commission
    - revenue     = commission + markup
    - Rounding: 2 dp, ROUND_HALF_UP, once per derived quantity. The percent
      products are rounded from the unrounded base price; the composite
      amounts are built from those rounded components so the decomposition
      identities hold exactly.
    - calculate() does NOT call validate(); callers validate first.

Design Decisions:
    - Base prices must be whole cents. With sub-cent base prices the three
      identities cannot all hold after rounding, so validate() rejects them.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from src.domain.quoting.constants import (
    PRICE_TOLERANCE,
    RULE_LINE_ITEM_TOTAL_MISMATCH,
    RULE_PRICE_CALCULATION_MISMATCH,
    RULE_PRICE_PER_KWP_TOO_HIGH,
    RULE_SYSTEM_SIZE_TOO_LARGE,
    RULE_SYSTEM_SIZE_TOO_SMALL,
)
from src.domain.quoting.pricing_config import PricingRules, to_decimal
from src.domain.quoting.services.pricing_config_provider import PricingConfigProvider
from src.domain.quoting.value_objects.financial_breakdown import FinancialBreakdown
from src.domain.quoting.value_objects.line_item import LineItem
from src.domain.quoting.value_objects.money import round_money
from src.domain.quoting.value_objects.quotation_totals import QuotationTotals
from src.domain.shared.exceptions import BusinessRuleViolationError, ValidationFailureError

logger = logging.getLogger(__name__)

Number = Decimal | int | float | str

HUNDRED = Decimal("100")


class FinancialCalculator:
    """
    Price validation and financial decomposition.

    Attributes:
        pricing_provider: Source of current rules (optional; required only
            when rules are not passed explicitly)

    Examples:
        >>> calculator = FinancialCalculator()
        >>> rules = PricingRules.default()
        >>> calculator.validate(10000, 1000, 10, rules)
        >>> b = calculator.calculate(10000, 1000, 10, rules)
        >>> b.platform_revenue
        Decimal('2500.00')
    """

    def __init__(self, pricing_provider: Optional[PricingConfigProvider] = None) -> None:
        self.pricing_provider = pricing_provider

    def current_rules(self, overrides: Optional[Mapping[str, Any]] = None) -> PricingRules:
        """
        Current rules from the provider with optional partial overrides.

        Raises:
            ValidationFailureError: If overrides name unknown fields or break invariants
        """
        rules = self.pricing_provider.get_rules() if self.pricing_provider else PricingRules.default()
        if overrides:
            rules = rules.with_overrides(overrides)
        return rules

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def validate(
        self,
        base_price: Number,
        price_per_kwp: Number,
        system_size_kwp: Number,
        rules: PricingRules,
    ) -> None:
        """
        Validate a submission against the rules.

        Checks, in order:
            1. base_price, price_per_kwp, system_size_kwp > 0 (ValidationFailure)
            2. base_price in whole cents (ValidationFailure). This is an extra
               input rule on top of the pricing rule checks below: sub-cent
               prices are refused rather than rounded, so the stored quote and
               its breakdown always agree to the cent
            3. price_per_kwp <= max_price_per_kwp (BusinessRuleViolation)
            4. min_system_size_kwp <= system_size_kwp <= max_system_size_kwp
               (BusinessRuleViolation)

        Raises:
            ValidationFailureError: Non-positive or malformed input
            BusinessRuleViolationError: Input breaks a pricing rule
        """
        base = self._positive(base_price, "base_price")
        ppk = self._positive(price_per_kwp, "price_per_kwp")
        size = self._positive(system_size_kwp, "system_size_kwp")

        if base != round_money(base):
            raise ValidationFailureError(
                f"base_price must have at most 2 decimal places, got {base}",
                field="base_price",
                value=base,
                code="INVALID_INPUT",
            )

        if ppk > rules.max_price_per_kwp:
            raise BusinessRuleViolationError(
                f"Price per kWp ({ppk}) exceeds maximum allowed ({rules.max_price_per_kwp})",
                rule=RULE_PRICE_PER_KWP_TOO_HIGH,
                actual=ppk,
                limit=rules.max_price_per_kwp,
            )

        self._check_system_size(size, rules)

    def validate_system_size(self, system_size_kwp: Number, rules: PricingRules) -> Decimal:
        """
        Validate a requested system size on its own (request creation).

        Returns:
            The size as Decimal

        Raises:
            ValidationFailureError: If size <= 0
            BusinessRuleViolationError: If size is outside the rules' bounds
        """
        size = self._positive(system_size_kwp, "system_size_kwp")
        self._check_system_size(size, rules)
        return size

    def check_price_consistency(
        self,
        base_price: Number,
        price_per_kwp: Number,
        system_size_kwp: Number,
        tolerance: Decimal = PRICE_TOLERANCE,
    ) -> None:
        """
        base_price must match round(price_per_kwp * system_size, 2) within tolerance.

        Raises:
            BusinessRuleViolationError: PRICE_CALCULATION_MISMATCH
        """
        base = to_decimal(base_price, "base_price")
        expected = round_money(
            to_decimal(price_per_kwp, "price_per_kwp") * to_decimal(system_size_kwp, "system_size_kwp")
        )
        if abs(base - expected) > tolerance:
            raise BusinessRuleViolationError(
                f"Base price ({base}) does not match price per kWp x system size ({expected})",
                rule=RULE_PRICE_CALCULATION_MISMATCH,
                actual=base,
                limit=expected,
                details={"tolerance": tolerance},
            )

    def check_line_item_total(
        self,
        base_price: Number,
        items: Iterable[LineItem],
        tolerance: Decimal = PRICE_TOLERANCE,
    ) -> None:
        """
        base_price must equal the sum of line item total prices within tolerance.

        An empty item list is not checked.

        Raises:
            BusinessRuleViolationError: LINE_ITEM_TOTAL_MISMATCH
        """
        items = list(items)
        if not items:
            return
        base = to_decimal(base_price, "base_price")
        items_total = round_money(sum((item.total_price for item in items), Decimal("0")))
        if abs(base - items_total) > tolerance:
            raise BusinessRuleViolationError(
                f"Base price ({base}) does not match sum of line items ({items_total})",
                rule=RULE_LINE_ITEM_TOTAL_MISMATCH,
                actual=base,
                limit=items_total,
                details={"tolerance": tolerance, "line_item_count": len(items)},
            )

    # ========================================================================
    # CALCULATION
    # ========================================================================

    def calculate(
        self,
        base_price: Number,
        price_per_kwp: Number,
        system_size_kwp: Number,
        rules: PricingRules,
    ) -> FinancialBreakdown:
        """
        Derive the financial breakdown of a base price.

        Does not validate. Invalid inputs give well-defined but meaningless
        output.

        Examples:
            >>> b = FinancialCalculator().calculate(10000, 1000, 10, PricingRules.default())
            >>> (b.markup_amount, b.total_user_price, b.commission_amount,
            ...  b.contractor_net_amount, b.platform_revenue)
            (Decimal('1000.00'), Decimal('11000.00'), Decimal('1500.00'),
             Decimal('8500.00'), Decimal('2500.00'))
        """
        base = to_decimal(base_price, "base_price")
        ppk = to_decimal(price_per_kwp, "price_per_kwp")
        size = to_decimal(system_size_kwp, "system_size_kwp")

        markup = round_money(base * rules.platform_markup_percent / HUNDRED)
        commission = round_money(base * rules.platform_commission_percent / HUNDRED)

        breakdown = FinancialBreakdown(
            base_price=round_money(base),
            price_per_kwp=round_money(ppk),
            system_size_kwp=size,
            markup_percent=rules.platform_markup_percent,
            commission_percent=rules.platform_commission_percent,
            markup_amount=markup,
            total_user_price=round_money(base + markup),
            commission_amount=commission,
            contractor_net_amount=round_money(base - commission),
            platform_revenue=round_money(commission + markup),
        )
        logger.debug(f"Calculated financials for base_price={base}: {breakdown.model_dump()}")
        return breakdown

    def compute(
        self,
        base_price: Number,
        price_per_kwp: Number,
        system_size_kwp: Number,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> FinancialBreakdown:
        """
        Validate then calculate using current rules (plus optional overrides).

        Raises:
            ValidationFailureError: Invalid input or overrides
            BusinessRuleViolationError: Input breaks a pricing rule
        """
        rules = self.current_rules(overrides)
        self.validate(base_price, price_per_kwp, system_size_kwp, rules)
        return self.calculate(base_price, price_per_kwp, system_size_kwp, rules)

    def aggregate_line_items(
        self, items: Iterable[LineItem], vat_rate_percent: Number
    ) -> QuotationTotals:
        """
        Sum line items and apply VAT on the vendor net total.

        Sums are plain sums of the pre-priced shares. Every output is rounded
        independently; an empty list yields all-zero totals.

        Examples:
            >>> totals = calculator.aggregate_line_items(items, 15)  # nets 100 + 200
            >>> totals.total_vendor_net, totals.vat_amount, totals.total_payable
            (Decimal('300.00'), Decimal('45.00'), Decimal('345.00'))
        """
        vat_rate = to_decimal(vat_rate_percent, "vat_rate_percent")
        zero = Decimal("0")
        total_price = total_commission = total_markup = total_user = total_net = zero

        for item in items:
            total_price += item.total_price
            total_commission += item.platform_commission
            total_markup += item.platform_markup
            total_user += item.user_price
            total_net += item.vendor_net_price

        vat_amount = total_net * vat_rate / HUNDRED

        return QuotationTotals(
            total_price=round_money(total_price),
            total_commission=round_money(total_commission),
            total_markup=round_money(total_markup),
            total_user_price=round_money(total_user),
            total_vendor_net=round_money(total_net),
            vat_amount=round_money(vat_amount),
            total_payable=round_money(total_net + vat_amount),
        )

    def apply_line_item_vat(
        self, items: Iterable[LineItem], vat_rate_percent: Number
    ) -> list[LineItem]:
        """
        Return copies of items with vat_amount = round(vendor_net * vat% / 100).
        """
        vat_rate = to_decimal(vat_rate_percent, "vat_rate_percent")
        return [
            item.model_copy(
                update={"vat_amount": round_money(item.vendor_net_price * vat_rate / HUNDRED)}
            )
            for item in items
        ]

    # ========================================================================
    # HELPERS
    # ========================================================================

    def _positive(self, value: Number, field_name: str) -> Decimal:
        number = to_decimal(value, field_name)
        if number <= 0:
            raise ValidationFailureError(
                f"{field_name} must be greater than 0, got {number}",
                field=field_name,
                value=number,
                limit=0,
            )
        return number

    def _check_system_size(self, size: Decimal, rules: PricingRules) -> None:
        if size > rules.max_system_size_kwp:
            raise BusinessRuleViolationError(
                f"System size ({size} kWp) exceeds maximum allowed ({rules.max_system_size_kwp} kWp)",
                rule=RULE_SYSTEM_SIZE_TOO_LARGE,
                actual=size,
                limit=rules.max_system_size_kwp,
            )
        if size < rules.min_system_size_kwp:
            raise BusinessRuleViolationError(
                f"System size ({size} kWp) is below minimum required ({rules.min_system_size_kwp} kWp)",
                rule=RULE_SYSTEM_SIZE_TOO_SMALL,
                actual=size,
                limit=rules.min_system_size_kwp,
            )
