"""
Quoting Domain Constants

Business rule identifiers, actor roles and tunable limits used across the
quoting subdomain. Status enums live next to the entity they belong to.

Note: Rule identifiers are part of the client contract (they are returned as
ErrorResponse.code), so renaming one is a breaking change.
"""

from decimal import Decimal
from enum import Enum
from typing import Final


# ============================================================================
# BUSINESS RULE IDENTIFIERS
# ============================================================================

# Pricing validation
RULE_PRICE_PER_KWP_TOO_HIGH: Final[str] = "PRICE_PER_KWP_TOO_HIGH"
RULE_SYSTEM_SIZE_TOO_LARGE: Final[str] = "SYSTEM_SIZE_TOO_LARGE"
RULE_SYSTEM_SIZE_TOO_SMALL: Final[str] = "SYSTEM_SIZE_TOO_SMALL"
RULE_PRICE_CALCULATION_MISMATCH: Final[str] = "PRICE_CALCULATION_MISMATCH"
RULE_LINE_ITEM_TOTAL_MISMATCH: Final[str] = "LINE_ITEM_TOTAL_MISMATCH"

# Lifecycle guards
RULE_INVALID_REQUEST_STATUS: Final[str] = "INVALID_REQUEST_STATUS"
RULE_INVALID_ASSIGNMENT_STATUS: Final[str] = "INVALID_ASSIGNMENT_STATUS"
RULE_INVALID_STATUS_TRANSITION: Final[str] = "INVALID_STATUS_TRANSITION"
RULE_NOT_ASSIGNED: Final[str] = "NOT_ASSIGNED"
RULE_TOO_MANY_CONTRACTORS: Final[str] = "TOO_MANY_CONTRACTORS"
RULE_CONTRACTOR_ALREADY_ASSIGNED: Final[str] = "CONTRACTOR_ALREADY_ASSIGNED"
RULE_QUOTE_ALREADY_APPROVED: Final[str] = "QUOTE_ALREADY_APPROVED"
RULE_QUOTE_NOT_APPROVED: Final[str] = "QUOTE_NOT_APPROVED"


# ============================================================================
# LIMITS
# ============================================================================

# Cap on selected contractors per request (overridable via settings)
DEFAULT_MAX_CONTRACTORS_PER_REQUEST: Final[int] = 10

# Allowed gap between base price and price_per_kwp * system_size
PRICE_TOLERANCE: Final[Decimal] = Decimal("0.01")

# Money is always quantized to cents
MONEY_QUANTUM: Final[Decimal] = Decimal("0.01")


# ============================================================================
# ENUMS
# ============================================================================


class ActorRole(str, Enum):
    """
    Role of the already-authenticated caller (identity port).

    The core never authenticates; it compares role and ownership only.
    """

    USER = "user"
    CONTRACTOR = "contractor"
    ADMIN = "admin"


class SubmissionEligibility(str, Enum):
    """
    Which precondition gates a contractor's quote submission.

    SELECTED: contractor id appears in the request's selected contractors
              (assignment existence, regardless of its response)
    ACCEPTED: contractor's assignment must be in the accepted state
    """

    SELECTED = "selected"
    ACCEPTED = "accepted"
