"""
QuotationTotals Value Object

Aggregate sums across a quote's line items. Derived on demand, never stored
as a source of truth.
"""

from decimal import Decimal

from pydantic import BaseModel

from src.domain.quoting.value_objects.money import ZERO


class QuotationTotals(BaseModel):
    """
    Totals of a detailed quotation.

    Attributes:
        total_price: Sum of line item total prices
        total_commission: Sum of platform commission shares
        total_markup: Sum of platform markup shares
        total_user_price: Sum of user-facing prices
        total_vendor_net: Sum of vendor net prices
        vat_amount: total_vendor_net * vat% / 100
        total_payable: total_vendor_net + vat_amount

    Examples:
        >>> totals.total_vendor_net, totals.vat_amount, totals.total_payable
        (Decimal('300.00'), Decimal('45.00'), Decimal('345.00'))
    """

    total_price: Decimal = ZERO
    total_commission: Decimal = ZERO
    total_markup: Decimal = ZERO
    total_user_price: Decimal = ZERO
    total_vendor_net: Decimal = ZERO
    vat_amount: Decimal = ZERO
    total_payable: Decimal = ZERO

    model_config = {"frozen": True}

    @classmethod
    def zero(cls) -> "QuotationTotals":
        """Totals of an empty quotation."""
        return cls()
