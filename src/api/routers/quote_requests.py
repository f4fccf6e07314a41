"""
API Router for Quote Requests

Responsibility:
    HTTP interface for the quote request lifecycle: creation, contractor
    selection, contractor view/response, quote submission, winner selection,
    completion, cancellation and the status view.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Thin wrapper around QuoteEngineService (Application Layer)
    - Request bodies are the Application Layer command models
    - Domain exceptions are mapped to HTTP codes in src/api/main.py

Contains:
    - POST   /quote-requests
    - GET    /quote-requests/{request_id}/status
    - POST   /quote-requests/{request_id}/cancel
    - POST   /quote-requests/{request_id}/contractors
    - DELETE /quote-requests/{request_id}/contractors/{contractor_id}
    - POST   /quote-requests/{request_id}/view
    - POST   /quote-requests/{request_id}/respond
    - POST   /quote-requests/{request_id}/quotes
    - POST   /quote-requests/{request_id}/select-quote
    - POST   /quote-requests/{request_id}/complete
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, status

from src.api.dependencies import get_actor, get_quote_engine_service
from src.api.schemas.common import ErrorResponse
from src.application.commands.contractor_respond import ContractorRespondCommand
from src.application.commands.create_quote_request import (
    AddContractorCommand,
    CancelQuoteRequestCommand,
    CreateQuoteRequestCommand,
    SelectQuoteCommand,
)
from src.application.commands.submit_quote import SubmitQuoteCommand
from src.application.models import (
    AssignmentResult,
    ContractorResponseResult,
    QuoteRequestResult,
    QuoteSubmissionResult,
)
from src.application.queries.get_quote_request_status import QuoteRequestStatusResult
from src.application.services.quote_engine_service import QuoteEngineService
from src.domain.quoting.value_objects import Actor

logger = logging.getLogger(__name__)


# ============================================================================
# ROUTER CONFIGURATION
# ============================================================================

router = APIRouter(
    prefix="/quote-requests",
    tags=["quote-requests"],
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request - Invalid input"},
        403: {"model": ErrorResponse, "description": "Forbidden - Role or ownership check failed"},
        404: {"model": ErrorResponse, "description": "Not Found - Request or assignment not found"},
        422: {"model": ErrorResponse, "description": "Unprocessable Entity - Business rule violated"},
        503: {"model": ErrorResponse, "description": "Service Unavailable - Storage failure"},
    },
)


# ============================================================================
# ENDPOINTS - REQUEST OWNER
# ============================================================================


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=QuoteRequestResult,
    summary="Create quote request",
    description=(
        "Creates a pending quote request for the calling user and invites "
        "the listed contractors (one assignment each)."
    ),
)
async def create_quote_request(
    command: CreateQuoteRequestCommand,
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteRequestResult:
    return service.create_quote_request(actor, command)


@router.get(
    "/{request_id}/status",
    response_model=QuoteRequestStatusResult,
    summary="Get quote request status",
    description=(
        "Request status with per-contractor assignment status, response "
        "counts and number of submitted quotes. Visible to the owner, admins "
        "and assigned contractors."
    ),
)
async def get_quote_request_status(
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteRequestStatusResult:
    return service.get_quote_request_status(actor, request_id)


@router.post(
    "/{request_id}/cancel",
    response_model=QuoteRequestResult,
    summary="Cancel quote request",
)
async def cancel_quote_request(
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    command: Optional[CancelQuoteRequestCommand] = None,
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteRequestResult:
    return service.cancel_quote_request(actor, request_id, command or CancelQuoteRequestCommand())


@router.post(
    "/{request_id}/contractors",
    response_model=QuoteRequestResult,
    summary="Add contractor to quote request",
)
async def add_contractor(
    command: AddContractorCommand,
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteRequestResult:
    return service.add_contractor(actor, request_id, command)


@router.delete(
    "/{request_id}/contractors/{contractor_id}",
    response_model=QuoteRequestResult,
    summary="Remove contractor from quote request",
)
async def remove_contractor(
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    contractor_id: str = Path(..., min_length=1),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteRequestResult:
    return service.remove_contractor(actor, request_id, contractor_id)


@router.post(
    "/{request_id}/select-quote",
    response_model=QuoteRequestResult,
    summary="Select winning quote",
    description="Owner (or admin) picks an approved quote; request moves to quote_selected.",
)
async def select_quote(
    command: SelectQuoteCommand,
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteRequestResult:
    return service.select_quote(actor, request_id, command)


@router.post(
    "/{request_id}/complete",
    response_model=QuoteRequestResult,
    summary="Complete quote request (admin)",
)
async def complete_quote_request(
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteRequestResult:
    return service.complete_quote_request(actor, request_id)


# ============================================================================
# ENDPOINTS - CONTRACTOR
# ============================================================================


@router.post(
    "/{request_id}/view",
    response_model=AssignmentResult,
    summary="Mark assignment viewed",
)
async def mark_assignment_viewed(
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> AssignmentResult:
    return service.mark_assignment_viewed(actor, request_id)


@router.post(
    "/{request_id}/respond",
    response_model=ContractorResponseResult,
    summary="Accept or reject quote request",
    description=(
        "Records the calling contractor's answer once and re-derives the "
        "request status from all assignments."
    ),
)
async def contractor_respond(
    command: ContractorRespondCommand,
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> ContractorResponseResult:
    return service.contractor_respond(actor, request_id, command)


@router.post(
    "/{request_id}/quotes",
    status_code=status.HTTP_201_CREATED,
    response_model=QuoteSubmissionResult,
    summary="Submit quote",
    description=(
        "Validates the price against current pricing rules, computes the "
        "platform breakdown and stores the quote (one per contractor per request)."
    ),
    responses={409: {"model": ErrorResponse, "description": "Conflict - Quote already submitted"}},
)
async def submit_quote(
    command: SubmitQuoteCommand,
    request_id: str = Path(..., min_length=1, description="Quote request id"),
    actor: Actor = Depends(get_actor),
    service: QuoteEngineService = Depends(get_quote_engine_service),
) -> QuoteSubmissionResult:
    return service.submit_quote(actor, request_id, command)
