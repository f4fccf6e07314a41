"""
UpdatePricingRulesCommand - CQRS Write Command

Admin write path for the pricing rules record. Every field is optional;
only the fields present are merged over the stored rules.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.domain.quoting.value_objects.money import coerce_decimal

RULE_FIELDS = (
    "max_price_per_kwp",
    "min_system_size_kwp",
    "max_system_size_kwp",
    "platform_markup_percent",
    "platform_commission_percent",
    "vat_rate_percent",
)


class UpdatePricingRulesCommand(BaseModel):
    """
    Partial pricing rules update.

    Range checks here cover single fields; cross-field invariants
    (min <= max size) are enforced by PricingRules after merging.

    Examples:
        >>> UpdatePricingRulesCommand(platform_markup_percent=12).changes()
        {'platform_markup_percent': Decimal('12')}
    """

    max_price_per_kwp: Optional[Decimal] = Field(default=None, gt=0)
    min_system_size_kwp: Optional[Decimal] = Field(default=None, ge=0)
    max_system_size_kwp: Optional[Decimal] = Field(default=None, gt=0)
    platform_markup_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    platform_commission_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    vat_rate_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)

    model_config = {"frozen": True}

    @field_validator(*RULE_FIELDS, mode="before")
    @classmethod
    def coerce_numbers(cls, value):
        return coerce_decimal(value)

    @model_validator(mode="after")
    def require_one_field(self) -> "UpdatePricingRulesCommand":
        if not self.changes():
            raise ValueError("at least one pricing rule must be provided")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
