"""Risk assessment engine - scores a single borrower profile"""

import logging
from lendmatch_gateway.domain.models import Borrower, RiskAssessment, RiskFactors

logger = logging.getLogger(__name__)

# Employment status → risk impact. Unknown statuses get medium risk.
EMPLOYMENT_RISK = {
    "full_time": 20,
    "self_employed": 35,
    "part_time": 40,
    "retired": 45,
    "student": 70,
    "unemployed": 90,
}
DEFAULT_EMPLOYMENT_RISK = 50

# Incomes at or above this contribute no risk
INCOME_CEILING = 150_000

WEIGHTS = {
    "credit_score": 0.35,
    "debt_to_income": 0.25,
    "employment_status": 0.15,
    "loan_amount": 0.15,
    "income": 0.10,
}


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def calculate_risk_factors(borrower: Borrower) -> RiskFactors:
    """
    Normalize each underwriting input onto a 0-100 risk scale.

    - Credit score: 300 → 100, 850 → 0 (linear)
    - Debt-to-income: ratio * 1.25, saturates at 80%
    - Employment: fixed lookup
    - Loan amount: loan-to-income ratio as a percentage, capped at 100
    - Income: inverse, zero risk from $150k up
    """
    credit_score_impact = _clamp(100 - ((borrower.credit_score - 300) / 550) * 100)
    debt_to_income_impact = min(100.0, borrower.debt_to_income_ratio * 1.25)
    employment_status_impact = EMPLOYMENT_RISK.get(borrower.employment_status, DEFAULT_EMPLOYMENT_RISK)

    # No reported income means no repayment capacity at all
    if borrower.income > 0:
        loan_amount_impact = min(100.0, (borrower.loan_amount / borrower.income) * 100)
        income_impact = max(0.0, 100 - min(100.0, (borrower.income / INCOME_CEILING) * 100))
    else:
        loan_amount_impact = 100.0
        income_impact = 100.0

    return RiskFactors(
        credit_score_impact=credit_score_impact,
        debt_to_income_impact=debt_to_income_impact,
        employment_status_impact=float(employment_status_impact),
        loan_amount_impact=loan_amount_impact,
        income_impact=income_impact,
    )


def calculate_risk_score(risk_factors: RiskFactors) -> int:
    """Weighted blend of the factor impacts, rounded to an integer 0-100"""
    score = (
        WEIGHTS["credit_score"] * risk_factors.credit_score_impact
        + WEIGHTS["debt_to_income"] * risk_factors.debt_to_income_impact
        + WEIGHTS["employment_status"] * risk_factors.employment_status_impact
        + WEIGHTS["loan_amount"] * risk_factors.loan_amount_impact
        + WEIGHTS["income"] * risk_factors.income_impact
    )
    # Round half up so x.5 scores land in the riskier integer
    return int(_clamp(score) + 0.5)


def determine_risk_band(score: int) -> str:
    """
    Map risk score to a band.

    - 0-29:  low_risk
    - 30-59: moderate_risk
    - 60+:   high_risk
    """
    if score < 30:
        return "low_risk"
    elif score < 60:
        return "moderate_risk"
    else:
        return "high_risk"


def explain_risk(borrower: Borrower, score: int) -> str:
    explanation = (
        f"Risk assessment based on credit score ({borrower.credit_score}), "
        f"debt-to-income ratio ({borrower.debt_to_income_ratio:g}%), "
        f"and employment status ({borrower.employment_status}). "
    )

    band = determine_risk_band(score)
    if band == "low_risk":
        explanation += "This borrower presents a low risk profile with strong financial indicators."
    elif band == "moderate_risk":
        explanation += "This borrower presents a moderate risk profile with some concerning financial indicators."
    else:
        explanation += "This borrower presents a high risk profile with multiple concerning financial indicators."

    return explanation


def assess_risk(borrower: Borrower) -> RiskAssessment:
    """
    Main entry point: score a borrower and explain the result.

    Pure computation; the borrower passed in is not modified. Attach the
    score with ``borrower.with_risk_score(assessment.risk_score)``.
    """
    risk_factors = calculate_risk_factors(borrower)
    score = calculate_risk_score(risk_factors)

    logger.debug("Assessed borrower %s: risk score %d", borrower.id, score)

    return RiskAssessment(
        risk_score=score,
        risk_band=determine_risk_band(score),
        risk_factors=risk_factors,
        explanation=explain_risk(borrower, score),
    )
