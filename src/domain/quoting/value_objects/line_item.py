"""
LineItem Value Object

One priced component or service row of a detailed quotation.

Responsibility:
    - Carry the pre-priced shares of a row (commission, markup, user price, vendor net)
    - Keep the row order stable inside its quote
    - Immutable value object

Architecture Notes:
    - Line items are priced by the caller (contractor UI); the engine sums
      them but never re-derives shares from percentages
    - total_price = quantity * unit_price is informational; aggregate
      reconciliation happens in FinancialCalculator and QuoteRequestLifecycle
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.domain.quoting.value_objects.money import ZERO, coerce_decimal


class LineItem(BaseModel):
    """
    Immutable row of a contractor's detailed quotation.

    Attributes:
        item_name: Short name of the component/service (e.g. "Inverter 10kW")
        description: Optional free-text description
        unit: Optional unit label ("pcs", "m", "kWp")
        quantity: Quantity ordered (> 0)
        unit_price: Contractor price per unit
        total_price: Contractor price for the row (quantity * unit_price)
        platform_commission: Commission share of this row
        platform_markup: Markup share of this row
        user_price: Price the end user sees for this row
        vendor_net_price: What the contractor receives for this row
        vat_amount: VAT on vendor_net_price (filled at submission time)
        line_order: 1-based position inside the quote

    Examples:
        >>> item = LineItem(
        ...     item_name="Panel 450W",
        ...     quantity=20,
        ...     unit_price=500,
        ...     total_price=10000,
        ...     platform_commission=1500,
        ...     platform_markup=1000,
        ...     user_price=11000,
        ...     vendor_net_price=8500,
        ...     line_order=1,
        ... )
        >>> item.vendor_net_price
        Decimal('8500')
    """

    item_name: str = Field(..., min_length=1, description="Component/service name")
    description: Optional[str] = Field(default=None, description="Free-text description")
    unit: Optional[str] = Field(default=None, description="Unit label")
    quantity: Decimal = Field(..., gt=0, description="Quantity (> 0)")
    unit_price: Decimal = Field(..., ge=0, description="Contractor price per unit")
    total_price: Decimal = Field(..., ge=0, description="quantity * unit_price")
    platform_commission: Decimal = Field(default=ZERO, ge=0)
    platform_markup: Decimal = Field(default=ZERO, ge=0)
    user_price: Decimal = Field(default=ZERO, ge=0)
    vendor_net_price: Decimal = Field(default=ZERO, ge=0)
    vat_amount: Decimal = Field(default=ZERO, ge=0)
    line_order: int = Field(default=1, ge=1, description="1-based ordering index")

    model_config = {"frozen": True}

    @field_validator(
        "quantity",
        "unit_price",
        "total_price",
        "platform_commission",
        "platform_markup",
        "user_price",
        "vendor_net_price",
        "vat_amount",
        mode="before",
    )
    @classmethod
    def coerce_money_fields(cls, value):
        return coerce_decimal(value)

    def expected_total(self) -> Decimal:
        """quantity * unit_price, unrounded."""
        return self.quantity * self.unit_price
