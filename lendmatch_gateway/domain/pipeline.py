"""Full decision pipeline: assess risk, then match and recommend"""

import logging
from typing import Dict, List, Sequence
from lendmatch_gateway.domain.exceptions import RECORD_ERRORS
from lendmatch_gateway.domain.models import (
    Assessed,
    Borrower,
    Lender,
    MarketRates,
    PipelineResult,
    RiskAssessment,
)
from lendmatch_gateway.domain.risk import assess_risk
from lendmatch_gateway.domain.matching import match_borrowers_with_lenders
from lendmatch_gateway.domain.recommendation import generate_loan_recommendations

logger = logging.getLogger(__name__)


def assess_borrowers(borrowers: Sequence[Borrower]) -> tuple[List[Borrower], Dict[str, RiskAssessment]]:
    """
    Attach a risk score to every unassessed borrower.

    Borrowers that already carry a score are passed through untouched. A
    borrower that cannot be scored is logged and kept unassessed, so later
    stages still see it and skip it pair by pair.
    Returns the new borrower list plus the assessments that were run, by id.
    """
    assessed: List[Borrower] = []
    assessments: Dict[str, RiskAssessment] = {}

    for borrower in borrowers:
        if isinstance(borrower.risk, Assessed):
            assessed.append(borrower)
            continue

        try:
            assessment = assess_risk(borrower)
        except RECORD_ERRORS as e:
            logger.warning(
                f"Skipping borrower during risk assessment: {e}",
                extra={"stage": "risk_assessment", "borrower_id": borrower.id},
            )
            assessed.append(borrower)
            continue

        assessments[borrower.id] = assessment
        assessed.append(borrower.with_risk_score(assessment.risk_score))

    return assessed, assessments


def run_pipeline(
    borrowers: Sequence[Borrower],
    lenders: Sequence[Lender],
    market_rates: MarketRates,
) -> PipelineResult:
    """
    Main entry point: run all three stages over one snapshot.

    Matching and recommendation are independent of each other and both read
    the same assessed borrower list.
    """
    assessed, assessments = assess_borrowers(borrowers)

    return PipelineResult(
        borrowers=assessed,
        matches=match_borrowers_with_lenders(assessed, lenders),
        recommendations=generate_loan_recommendations(assessed, lenders, market_rates),
        risk_assessments=assessments,
    )
