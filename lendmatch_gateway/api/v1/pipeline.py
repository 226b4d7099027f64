"""POST /v1/pipeline - Assess, match and recommend in one call"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from lendmatch_gateway.api.v1.schemas import (
    BorrowerSchema,
    MatchSchema,
    PipelineResponse,
    RecommendationRequest,
    RecommendationSchema,
)
from lendmatch_gateway.api.v1.market import resolve_market_rates
from lendmatch_gateway.api.dependencies import (
    get_borrower_id_generator,
    get_lender_id_generator,
    get_market_data_client,
    get_request_id,
)
from lendmatch_gateway.domain.pipeline import run_pipeline
from lendmatch_gateway.domain.synthetic import UUIDIdGenerator
from lendmatch_gateway.infrastructure.clients.market_data import FinancialDataClient
from lendmatch_gateway.infrastructure.observability.metrics import (
    record_matches,
    record_recommendations,
    record_risk_assessment,
)
from lendmatch_gateway.infrastructure.observability.logging import log_pipeline_stage

router = APIRouter()


@router.post("/pipeline", response_model=PipelineResponse)
async def run_full_pipeline(
    request_body: RecommendationRequest,
    request: Request,
    client: FinancialDataClient = Depends(get_market_data_client),
    borrower_ids: UUIDIdGenerator = Depends(get_borrower_id_generator),
    lender_ids: UUIDIdGenerator = Depends(get_lender_id_generator),
):
    """
    Run the whole decision pipeline over one snapshot.

    Flow:
    1. Resolve market rates
    2. Risk-assess every borrower that arrived without a score
    3. Rank matches and recommend terms over the assessed borrowers
    """
    start_time = time.time()
    request_id = get_request_id(request)

    borrowers = [borrower.to_domain(borrower_ids) for borrower in request_body.borrowers]
    lenders = [lender.to_domain(lender_ids) for lender in request_body.lenders]
    market_rates = await resolve_market_rates(request_body.market_rates, client, request_id)

    try:
        result = run_pipeline(borrowers, lenders, market_rates)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    for assessment in result.risk_assessments.values():
        record_risk_assessment(assessment.risk_band)
    record_matches(m.match_score for m in result.matches)
    record_recommendations(len(result.recommendations))
    log_pipeline_stage(
        request_id,
        "pipeline",
        len(borrowers) * len(lenders),
        len(result.matches) + len(result.recommendations),
        (time.time() - start_time) * 1000,
    )

    return PipelineResponse(
        borrowers=[BorrowerSchema.from_domain(b) for b in result.borrowers],
        market_rates=market_rates,
        matches=[MatchSchema.model_validate(m) for m in result.matches],
        recommendations=[RecommendationSchema.model_validate(r) for r in result.recommendations],
    )
