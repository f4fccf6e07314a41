"""
FinancialBreakdown Value Object

Result of FinancialCalculator.calculate(): how one base price splits into
what the user pays, what the contractor receives and what the platform earns.

Responsibility:
    - Hold the five derived amounts plus the inputs and rates they came from
    - Expose a reconciliation check for the decomposition identities
    - Immutable value object

Identities (exact for whole-cent base prices):
    total_user_price    = base_price + markup_amount
    contractor_net      = base_price - commission_amount
    platform_revenue    = commission_amount + markup_amount
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class FinancialBreakdown(BaseModel):
    """
    Immutable financial decomposition of a contractor's base price.

    Markup is added on top of the base price and paid by the user; commission
    is taken out of the base price and reduces the contractor payout.

    Attributes:
        base_price: Contractor's quoted price
        price_per_kwp: Contractor's price per kWp of capacity
        system_size_kwp: Requested system size
        markup_percent: Markup rate the amounts were derived with
        commission_percent: Commission rate the amounts were derived with
        markup_amount: base_price * markup% / 100
        total_user_price: base_price + markup_amount
        commission_amount: base_price * commission% / 100
        contractor_net_amount: base_price - commission_amount
        platform_revenue: commission_amount + markup_amount

    Examples:
        >>> breakdown.markup_amount, breakdown.total_user_price
        (Decimal('1000.00'), Decimal('11000.00'))
    """

    base_price: Decimal
    price_per_kwp: Decimal
    system_size_kwp: Decimal
    markup_percent: Decimal
    commission_percent: Decimal
    markup_amount: Decimal = Field(description="Platform markup added on top of base price")
    total_user_price: Decimal = Field(description="Price paid by the end user")
    commission_amount: Decimal = Field(description="Platform commission deducted from base price")
    contractor_net_amount: Decimal = Field(description="Net payout to the contractor")
    platform_revenue: Decimal = Field(description="Commission plus markup")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "base_price": "10000",
                    "price_per_kwp": "1000",
                    "system_size_kwp": "10",
                    "markup_percent": "10",
                    "commission_percent": "15",
                    "markup_amount": "1000.00",
                    "total_user_price": "11000.00",
                    "commission_amount": "1500.00",
                    "contractor_net_amount": "8500.00",
                    "platform_revenue": "2500.00",
                }
            ]
        },
    }

    def reconciles(self) -> bool:
        """
        Check the three decomposition identities on the stored amounts.

        Holds for every breakdown produced from a validated base price
        (whole cents). Used by tests and by audit logging.
        """
        return (
            self.total_user_price == self.base_price + self.markup_amount
            and self.contractor_net_amount == self.base_price - self.commission_amount
            and self.platform_revenue == self.commission_amount + self.markup_amount
        )
