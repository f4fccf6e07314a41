"""
API Router for Pricing

Responsibility:
    Price previews and the admin write path for pricing rules.

Contains:
    - POST /pricing/calculate - Validate a price and return its breakdown
    - GET  /pricing/rules     - Current pricing rules
    - PUT  /pricing/rules     - Partial update of pricing rules (admin)

Architecture Notes:
    - calculate and GET rules need no identity headers
    - PUT rules requires X-User-Role: admin
"""

import logging

from fastapi import APIRouter, Depends

from src.api.dependencies import get_actor, get_quote_engine_service
from src.api.schemas.common import ErrorResponse
from src.application.commands.update_pricing_rules import UpdatePricingRulesCommand
from src.application.models import PricingRulesResult
from src.application.queries.compute_financials import ComputeFinancialsQuery, FinancialsResult
from src.application.services.quote_engine_service import QuoteEngineService
from src.domain.quoting.value_objects import Actor

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/pricing",
    tags=["pricing"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Invalid input or overrides"},
        422: {"model": ErrorResponse, "description": "Unprocessable Entity - Pricing rule violated"},
    },
)


@router.post(
    "/calculate",
    response_model=FinancialsResult,
    summary="Calculate quote financials",
    description=(
        "Validates base price, price per kWp and system size against the "
        "current pricing rules (plus optional overrides) and returns markup, "
        "commission, net payout and platform revenue. With line items, also "
        "returns totals including VAT."
    ),
)
async def calculate_financials(
    query: ComputeFinancialsQuery,
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> FinancialsResult:
    return service.compute_financials(query)


@router.get("/rules", response_model=PricingRulesResult, summary="Get pricing rules")
async def get_pricing_rules(
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> PricingRulesResult:
    return service.get_pricing_rules()


@router.put(
    "/rules",
    response_model=PricingRulesResult,
    summary="Update pricing rules (admin)",
    responses={
        403: {"model": ErrorResponse, "description": "Forbidden - Admin role required"},
        503: {"model": ErrorResponse, "description": "Service Unavailable - Rules store down"},
    },
)
async def update_pricing_rules(
    command: UpdatePricingRulesCommand,
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> PricingRulesResult:
    logger.info(f"Pricing rules update requested by {actor.actor_id}")
    return service.update_pricing_rules(actor, command)
