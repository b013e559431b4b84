"""/v1/quotes - quote generation, retrieval and premium estimate endpoints"""

import logging
from fastapi import APIRouter, Depends, Request

from quote_gateway.api.v1.schemas import ErrorResponse, QuoteRequestSchema, QuoteResponse, PremiumResponse
from quote_gateway.api.dependencies import get_quote_service, get_request_id
from quote_gateway.services.quote_service import QuoteService

router = APIRouter()

_REQUEST_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid quote request"},
    503: {"model": ErrorResponse, "description": "Quote storage unavailable"},
}
_LOOKUP_ERRORS = {
    400: {"model": ErrorResponse, "description": "Blank quote id"},
    404: {"model": ErrorResponse, "description": "Quote not found"},
    503: {"model": ErrorResponse, "description": "Quote storage unavailable"},
}


@router.post("/quotes", response_model=QuoteResponse, status_code=201, responses=_REQUEST_ERRORS)
def create_quote(
    request_body: QuoteRequestSchema,
    request: Request,
    quote_service: QuoteService = Depends(get_quote_service),
):
    """
    Generate and persist a quote.

    Flow:
    1. Validate vehicle, drivers and coverage
    2. Calculate base premium from risk factors
    3. Apply eligible discounts (capped at 25%)
    4. Save quote valid for 30 days
    """
    request_id = get_request_id(request)
    summary = quote_service.generate_quote(request_body.to_domain())

    logging.info(
        "Quote created",
        extra={"request_id": request_id, "quote_id": summary.quote_id, "premium": str(summary.premium)},
    )
    return QuoteResponse.from_summary(summary)


@router.get("/quotes/{quote_id}", response_model=QuoteResponse, responses=_LOOKUP_ERRORS)
def get_quote(quote_id: str, quote_service: QuoteService = Depends(get_quote_service)):
    """Retrieve a previously generated quote"""
    return QuoteResponse.from_summary(quote_service.get_quote_by_id(quote_id))


@router.post("/quotes/calculate", response_model=PremiumResponse, responses={400: _REQUEST_ERRORS[400]})
def calculate_premium(
    request_body: QuoteRequestSchema,
    quote_service: QuoteService = Depends(get_quote_service),
):
    """
    Estimate the base premium without discounts or persistence.

    Returns:
        Base premium; a full quote for the same request may be lower
    """
    return PremiumResponse(premium=quote_service.calculate_premium(request_body.to_domain()))
