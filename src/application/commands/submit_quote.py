"""
SubmitQuoteCommand - CQRS Write Command

Encapsulates a contractor's price submission for a quote request, optionally
with a detailed quotation (line items).

Responsibility:
    - Data holder for quote submission
    - Input shape validation (positive prices, non-negative line item shares)
    - Conversion of line item input rows to LineItem value objects

Architecture Notes:
    - Part of Application Layer (orchestration)
    - Used by QuoteEngineService.submit_quote
    - Pricing rules, consistency checks and the one-quote-per-contractor
      guard are Domain Layer responsibilities (QuoteRequestLifecycle)
    - VAT per line item is computed by the engine, never accepted from input
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from src.domain.quoting.value_objects import LineItem
from src.domain.quoting.value_objects.money import ZERO, coerce_decimal

MONEY_FIELDS = (
    "quantity",
    "unit_price",
    "total_price",
    "platform_commission",
    "platform_markup",
    "user_price",
    "vendor_net_price",
)


class LineItemInput(BaseModel):
    """
    One row of a detailed quotation as submitted by the contractor UI.

    The shares (commission, markup, user price, vendor net) are pre-priced by
    the caller and trusted as given.

    Attributes:
        serial_number: Optional 1-based position; defaults to the row index
    """

    item_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    unit: Optional[str] = None
    quantity: Decimal = Field(..., gt=0)
    unit_price: Decimal = Field(..., ge=0)
    total_price: Decimal = Field(..., ge=0)
    platform_commission: Decimal = Field(default=ZERO, ge=0)
    platform_markup: Decimal = Field(default=ZERO, ge=0)
    user_price: Decimal = Field(default=ZERO, ge=0)
    vendor_net_price: Decimal = Field(default=ZERO, ge=0)
    serial_number: Optional[int] = Field(default=None, ge=1)

    @field_validator(*MONEY_FIELDS, mode="before")
    @classmethod
    def coerce_money_fields(cls, value):
        return coerce_decimal(value)

    def to_line_item(self, position: int) -> LineItem:
        """
        Convert to a LineItem.

        Args:
            position: 1-based index of the row in the submission
        """
        return LineItem(
            item_name=self.item_name,
            description=self.description,
            unit=self.unit,
            quantity=self.quantity,
            unit_price=self.unit_price,
            total_price=self.total_price,
            platform_commission=self.platform_commission,
            platform_markup=self.platform_markup,
            user_price=self.user_price,
            vendor_net_price=self.vendor_net_price,
            line_order=self.serial_number or position,
        )


class SubmitQuoteCommand(BaseModel):
    """
    Command carrying a contractor's quote.

    Attributes:
        base_price: Contractor's total price (whole cents)
        price_per_kwp: Contractor's price per kWp
        line_items: Optional detailed quotation rows
        system_specs / warranty_terms / installation_timeline: Opaque
            pass-through data stored on the quote
        notes: Optional free text for the user

    Examples:
        >>> command = SubmitQuoteCommand(base_price=10000, price_per_kwp=1000)
        >>> command.to_line_items()
        []
    """

    base_price: Decimal = Field(..., gt=0)
    price_per_kwp: Decimal = Field(..., gt=0)
    line_items: list[LineItemInput] = Field(default_factory=list)
    system_specs: Optional[dict[str, Any]] = None
    warranty_terms: Optional[dict[str, Any]] = None
    installation_timeline: Optional[dict[str, Any]] = None
    notes: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("base_price", "price_per_kwp", mode="before")
    @classmethod
    def coerce_prices(cls, value):
        return coerce_decimal(value)

    def to_line_items(self) -> list[LineItem]:
        return [item.to_line_item(index) for index, item in enumerate(self.line_items, start=1)]

    def details(self) -> dict[str, Any]:
        """Opaque pass-through data stored on the quote."""
        blobs = {
            "system_specs": self.system_specs,
            "warranty_terms": self.warranty_terms,
            "installation_timeline": self.installation_timeline,
            "notes": self.notes,
        }
        return {key: value for key, value in blobs.items() if value is not None}
