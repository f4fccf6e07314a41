"""
Pricing Configuration

Percentage-based business rules applied to every contractor price submission.
Defines the defaults used when no rules record exists or the store is down.

Business Context:
    The platform earns money twice on every quote:
    - Markup (overprice) - added on top of the contractor's base price, paid by the user
    - Commission - deducted from the contractor's base price
    VAT is charged on the vendor net amount of itemised quotations.

Design Principles:
    - Immutable value object (frozen dataclass)
    - Validated on construction (percentages >= 0, min size <= max size)
    - Serializable to/from plain dict for the configuration store
"""

from dataclasses import asdict, dataclass, fields, replace
from decimal import Decimal
from typing import Any, Final, Mapping

from src.domain.shared.exceptions import ValidationFailureError


# ============================================================================
# DEFAULT RULES
# ============================================================================

DEFAULT_MAX_PRICE_PER_KWP: Final[Decimal] = Decimal("2000")
DEFAULT_MIN_SYSTEM_SIZE_KWP: Final[Decimal] = Decimal("1")
DEFAULT_MAX_SYSTEM_SIZE_KWP: Final[Decimal] = Decimal("100")
DEFAULT_PLATFORM_MARKUP_PERCENT: Final[Decimal] = Decimal("10")
DEFAULT_PLATFORM_COMMISSION_PERCENT: Final[Decimal] = Decimal("15")
DEFAULT_VAT_RATE_PERCENT: Final[Decimal] = Decimal("15")

PERCENT_FIELDS: Final[tuple[str, ...]] = (
    "platform_markup_percent",
    "platform_commission_percent",
    "vat_rate_percent",
)


def to_decimal(value: Any, field_name: str) -> Decimal:
    """
    Convert int/float/str/Decimal to Decimal without binary float artifacts.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not
    Decimal("0.1000000000000000055511151231257827").

    Raises:
        ValidationFailureError: If value cannot be interpreted as a number
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise ValidationFailureError(
            f"{field_name} must be a number, got {value!r}",
            field=field_name,
            value=value,
            code="INVALID_INPUT",
        )
    elif isinstance(value, float):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(value)
        except (ArithmeticError, TypeError, ValueError) as e:
            raise ValidationFailureError(
                f"{field_name} must be a number, got {value!r}",
                field=field_name,
                value=value,
                code="INVALID_INPUT",
            ) from e

    if not result.is_finite():
        raise ValidationFailureError(
            f"{field_name} must be a finite number, got {value!r}",
            field=field_name,
            value=str(value),
            code="INVALID_INPUT",
        )
    return result


@dataclass(frozen=True)
class PricingRules:
    """
    Current business rules for quote pricing.

    Attributes:
        max_price_per_kwp: Highest accepted contractor price per kWp (2000)
        min_system_size_kwp: Smallest system size accepted (1 kWp)
        max_system_size_kwp: Largest system size accepted (100 kWp)
        platform_markup_percent: Markup added on top of base price (10%)
        platform_commission_percent: Commission deducted from base price (15%)
        vat_rate_percent: VAT rate applied to vendor net totals (15%)

    Invariants:
        - all percentages are >= 0
        - min_system_size_kwp <= max_system_size_kwp

    Usage:
        rules = PricingRules.default()
        calculator.calculate(base_price, price_per_kwp, size, rules)
    """

    max_price_per_kwp: Decimal = DEFAULT_MAX_PRICE_PER_KWP
    min_system_size_kwp: Decimal = DEFAULT_MIN_SYSTEM_SIZE_KWP
    max_system_size_kwp: Decimal = DEFAULT_MAX_SYSTEM_SIZE_KWP
    platform_markup_percent: Decimal = DEFAULT_PLATFORM_MARKUP_PERCENT
    platform_commission_percent: Decimal = DEFAULT_PLATFORM_COMMISSION_PERCENT
    vat_rate_percent: Decimal = DEFAULT_VAT_RATE_PERCENT

    def __post_init__(self) -> None:
        """Normalize every field to Decimal and validate invariants."""
        for f in fields(self):
            # frozen dataclass: bypass __setattr__ for normalization
            object.__setattr__(self, f.name, to_decimal(getattr(self, f.name), f.name))

        for name in PERCENT_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ValidationFailureError(
                    f"{name} must be >= 0, got {value}", field=name, value=value, limit=0
                )

        if self.max_price_per_kwp <= 0:
            raise ValidationFailureError(
                f"max_price_per_kwp must be > 0, got {self.max_price_per_kwp}",
                field="max_price_per_kwp",
                value=self.max_price_per_kwp,
                limit=0,
            )

        if self.min_system_size_kwp > self.max_system_size_kwp:
            raise ValidationFailureError(
                f"min_system_size_kwp ({self.min_system_size_kwp}) must not exceed "
                f"max_system_size_kwp ({self.max_system_size_kwp})",
                field="min_system_size_kwp",
                value=self.min_system_size_kwp,
                limit=self.max_system_size_kwp,
            )

    @classmethod
    def default(cls) -> "PricingRules":
        """
        Get default rules from module constants.

        Returns:
            PricingRules with the platform defaults

        Examples:
            >>> rules = PricingRules.default()
            >>> rules.max_price_per_kwp
            Decimal('2000')
            >>> rules.vat_rate_percent
            Decimal('15')
        """
        return cls()

    @classmethod
    def for_testing(cls, **overrides: Any) -> "PricingRules":
        """
        Create rules with custom overrides for testing.

        Examples:
            >>> rules = PricingRules.for_testing(platform_markup_percent=0)
            >>> rules.platform_markup_percent
            Decimal('0')
        """
        return cls.default().with_overrides(overrides)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PricingRules":
        """
        Build rules from a stored record, ignoring unknown keys.

        Missing keys fall back to defaults so older records stay readable.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known and v is not None})

    def with_overrides(self, overrides: Mapping[str, Any]) -> "PricingRules":
        """
        Return a copy with the given fields replaced.

        Raises:
            ValidationFailureError: If an unknown field is given or the
                result breaks an invariant
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValidationFailureError(
                f"Unknown pricing rule field(s): {', '.join(unknown)}",
                field=unknown[0],
                code="INVALID_INPUT",
            )
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, str]:
        """
        Convert to dictionary for storage/logging.

        Decimals are serialized as strings to keep exact values in JSON.
        """
        return {name: str(value) for name, value in asdict(self).items()}
