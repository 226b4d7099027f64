"""POST /v1/risk/assess - Borrower risk assessment endpoint"""

import time
from fastapi import APIRouter, Depends, Request

from lendmatch_gateway.api.v1.schemas import BorrowerSchema, RiskAssessmentResponse, RiskFactorsSchema
from lendmatch_gateway.api.dependencies import get_borrower_id_generator, get_request_id
from lendmatch_gateway.domain.risk import assess_risk
from lendmatch_gateway.domain.synthetic import UUIDIdGenerator
from lendmatch_gateway.infrastructure.observability.metrics import record_risk_assessment
from lendmatch_gateway.infrastructure.observability.logging import log_pipeline_stage

router = APIRouter()


@router.post("/risk/assess", response_model=RiskAssessmentResponse)
def assess_borrower_risk(
    request_body: BorrowerSchema,
    request: Request,
    borrower_ids: UUIDIdGenerator = Depends(get_borrower_id_generator),
):
    """
    Score one borrower.

    Returns the 0-100 risk score (higher = riskier), its band, the per-factor
    breakdown and a plain-language explanation.
    """
    start_time = time.time()
    borrower = request_body.to_domain(borrower_ids)

    assessment = assess_risk(borrower)

    record_risk_assessment(assessment.risk_band)
    log_pipeline_stage(get_request_id(request), "risk_assessment", 1, 1, (time.time() - start_time) * 1000)

    return RiskAssessmentResponse(
        borrower_id=borrower.id,
        risk_score=assessment.risk_score,
        risk_band=assessment.risk_band,
        risk_factors=RiskFactorsSchema.model_validate(assessment.risk_factors),
        explanation=assessment.explanation,
    )
