"""
Audit Logging

Business audit trail for the quote engine. Audit events go to a dedicated
logger ("quote_engine.audit") so deployments can route them separately from
application logs.

Event names:
    QUOTE_REQUEST_CREATED, QUOTE_REQUEST_CANCELLED, QUOTE_REQUEST_COMPLETED,
    CONTRACTOR_ADDED_TO_REQUEST, CONTRACTOR_REMOVED_FROM_REQUEST,
    CONTRACTOR_RESPONDED_TO_REQUEST, CONTRACTOR_QUOTE_SUBMITTED,
    DETAILED_QUOTATION_SUBMITTED, CONTRACTOR_QUOTE_APPROVED,
    CONTRACTOR_QUOTE_REJECTED, CONTRACTOR_QUOTE_REVISION_REQUESTED,
    QUOTE_SELECTED, QUOTE_FINANCIAL_CALCULATION, PRICING_RULES_UPDATED

Examples:
    >>> audit_event("QUOTE_REQUEST_CREATED", request_id="qr-1", user_id="u-1")
    # INFO quote_engine.audit - AUDIT: QUOTE_REQUEST_CREATED {"request_id": "qr-1", ...}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

AUDIT_LOGGER_NAME = "quote_engine.audit"

audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)


def audit_event(action: str, **data: Any) -> dict[str, Any]:
    """
    Emit one audit record.

    Args:
        action: Event name (upper snake case)
        **data: Event payload; non-JSON values are stringified

    Returns:
        The payload that was logged (handy for tests)
    """
    payload = {
        "audit_type": "quote",
        "action": action,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **data,
    }
    audit_logger.info(
        f"AUDIT: {action} {json.dumps(payload, default=str, sort_keys=True)}",
        extra={"audit": payload},
    )
    return payload
