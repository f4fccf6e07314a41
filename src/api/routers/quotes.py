"""
API Router for Contractor Quotes (admin review)

Contains:
    - POST /quotes/{quote_id}/approve
    - POST /quotes/{quote_id}/reject
    - POST /quotes/{quote_id}/request-revision

Reviews change the quote only; the request status is untouched.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path

from src.api.dependencies import get_actor, get_quote_engine_service
from src.api.schemas.common import ErrorResponse
from src.application.commands.review_quote import (
    ApproveQuoteCommand,
    RejectQuoteCommand,
    RequestRevisionCommand,
)
from src.application.models import QuoteResult
from src.application.services.quote_engine_service import QuoteEngineService
from src.domain.quoting.value_objects import Actor

router = APIRouter(
    prefix="/quotes",
    tags=["quotes"],
    responses={
        403: {"model": ErrorResponse, "description": "Forbidden - Admin role required"},
        404: {"model": ErrorResponse, "description": "Not Found - Quote not found"},
        422: {"model": ErrorResponse, "description": "Unprocessable Entity - Quote already approved"},
    },
)


@router.post("/{quote_id}/approve", response_model=QuoteResult, summary="Approve quote")
async def approve_quote(
    quote_id: str = Path(..., min_length=1, description="Contractor quote id"),
    command: Optional[ApproveQuoteCommand] = None,
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteResult:
    return service.approve_quote(actor, quote_id, command or ApproveQuoteCommand())


@router.post("/{quote_id}/reject", response_model=QuoteResult, summary="Reject quote")
async def reject_quote(
    command: RejectQuoteCommand,
    quote_id: str = Path(..., min_length=1, description="Contractor quote id"),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteResult:
    return service.reject_quote(actor, quote_id, command)


@router.post(
    "/{quote_id}/request-revision", response_model=QuoteResult, summary="Request quote revision"
)
async def request_quote_revision(
    quote_id: str = Path(..., min_length=1, description="Contractor quote id"),
    command: Optional[RequestRevisionCommand] = None,
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteResult:
    return service.request_quote_revision(actor, quote_id, command or RequestRevisionCommand())
