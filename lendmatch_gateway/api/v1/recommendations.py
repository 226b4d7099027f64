"""POST /v1/recommendations - Loan rate/term recommendation endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from lendmatch_gateway.api.v1.schemas import (
    RecommendationRequest,
    RecommendationResponse,
    RecommendationSchema,
)
from lendmatch_gateway.api.v1.market import resolve_market_rates
from lendmatch_gateway.api.dependencies import (
    get_borrower_id_generator,
    get_lender_id_generator,
    get_market_data_client,
    get_request_id,
)
from lendmatch_gateway.domain.recommendation import generate_loan_recommendations
from lendmatch_gateway.domain.synthetic import UUIDIdGenerator
from lendmatch_gateway.infrastructure.clients.market_data import FinancialDataClient
from lendmatch_gateway.infrastructure.observability.metrics import record_recommendations
from lendmatch_gateway.infrastructure.observability.logging import log_pipeline_stage

router = APIRouter()


@router.post("/recommendations", response_model=RecommendationResponse)
async def create_recommendations(
    request_body: RecommendationRequest,
    request: Request,
    client: FinancialDataClient = Depends(get_market_data_client),
    borrower_ids: UUIDIdGenerator = Depends(get_borrower_id_generator),
    lender_ids: UUIDIdGenerator = Depends(get_lender_id_generator),
):
    """
    Recommend rate, term and payment for every eligible pair.

    Flow:
    1. Resolve market rates (request body, data source, or fallback table)
    2. Select term and price each eligible pair
    3. Return recommendations in borrower-then-lender order
    """
    start_time = time.time()
    request_id = get_request_id(request)

    borrowers = [borrower.to_domain(borrower_ids) for borrower in request_body.borrowers]
    lenders = [lender.to_domain(lender_ids) for lender in request_body.lenders]
    market_rates = await resolve_market_rates(request_body.market_rates, client, request_id)

    try:
        recommendations = generate_loan_recommendations(borrowers, lenders, market_rates)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_recommendations(len(recommendations))
    log_pipeline_stage(
        request_id,
        "recommendation",
        len(borrowers) * len(lenders),
        len(recommendations),
        (time.time() - start_time) * 1000,
    )

    return RecommendationResponse(
        market_rates=market_rates,
        recommendations=[RecommendationSchema.model_validate(r) for r in recommendations],
    )
