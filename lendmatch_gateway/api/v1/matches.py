"""POST /v1/matches - Borrower/lender matching endpoint"""

import time
from fastapi import APIRouter, Depends, Request

from lendmatch_gateway.api.v1.schemas import MatchRequest, MatchResponse, MatchSchema
from lendmatch_gateway.api.dependencies import (
    get_borrower_id_generator,
    get_lender_id_generator,
    get_request_id,
)
from lendmatch_gateway.domain.matching import match_borrowers_with_lenders
from lendmatch_gateway.domain.synthetic import UUIDIdGenerator
from lendmatch_gateway.infrastructure.observability.metrics import record_matches
from lendmatch_gateway.infrastructure.observability.logging import log_pipeline_stage

router = APIRouter()


@router.post("/matches", response_model=MatchResponse)
def create_matches(
    request_body: MatchRequest,
    request: Request,
    borrower_ids: UUIDIdGenerator = Depends(get_borrower_id_generator),
    lender_ids: UUIDIdGenerator = Depends(get_lender_id_generator),
):
    """
    Rank every eligible borrower/lender pair by match score.

    Borrowers are matched as submitted; send risk_score to apply the
    lender's risk tolerance and the risk headroom bonus.
    """
    start_time = time.time()
    borrowers = [borrower.to_domain(borrower_ids) for borrower in request_body.borrowers]
    lenders = [lender.to_domain(lender_ids) for lender in request_body.lenders]

    matches = match_borrowers_with_lenders(borrowers, lenders)

    record_matches(m.match_score for m in matches)
    log_pipeline_stage(
        get_request_id(request),
        "matching",
        len(borrowers) * len(lenders),
        len(matches),
        (time.time() - start_time) * 1000,
    )

    return MatchResponse(matches=[MatchSchema.model_validate(m) for m in matches])
