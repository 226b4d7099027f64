"""Loan recommendation engine - proposes rate and term for eligible pairs"""

import logging
from typing import List, Optional, Sequence
from lendmatch_gateway.domain.models import (
    Assessed,
    Borrower,
    Lender,
    LoanRecommendation,
    MarketRates,
)
from lendmatch_gateway.domain.eligibility import is_eligible
from lendmatch_gateway.domain.amortization import calculate_loan_payments
from lendmatch_gateway.domain.exceptions import RECORD_ERRORS, InvalidProfileError

logger = logging.getLogger(__name__)


def find_best_loan_term(borrower: Borrower, lender: Lender) -> int:
    """
    Pick the borrower's requested term when the lender offers it,
    otherwise the closest offered term (earliest in the lender's list on ties).
    """
    if not lender.loan_terms:
        raise InvalidProfileError(f"Lender {lender.id} offers no loan terms")

    if borrower.loan_term in lender.loan_terms:
        return borrower.loan_term

    closest_term = lender.loan_terms[0]
    min_diff = abs(closest_term - borrower.loan_term)
    for term in lender.loan_terms:
        diff = abs(term - borrower.loan_term)
        if diff < min_diff:
            min_diff = diff
            closest_term = term

    return closest_term


def calculate_recommended_rate(borrower: Borrower, lender: Lender, market_rate: float) -> float:
    """
    Price the loan from the lender's base rate and the market rate for the term.

    Risk tiers:
    - low (<30):    max(market * 0.9, base * 0.9)
    - high (>60):   max(market * 1.2, base * 1.1)
    - medium/unassessed: max(market * 1.05, base)

    Credit nudge: >750 → -0.5, <650 → +0.5.
    Bounds: not below 80% of market, not above 150% of base.
    """
    base_rate = lender.interest_rate

    risk_score = borrower.risk.score if isinstance(borrower.risk, Assessed) else None
    if risk_score is not None and risk_score < 30:
        rate = max(market_rate * 0.9, base_rate * 0.9)
    elif risk_score is not None and risk_score > 60:
        rate = max(market_rate * 1.2, base_rate * 1.1)
    else:
        rate = max(market_rate * 1.05, base_rate)

    if borrower.credit_score > 750:
        rate -= 0.5
    elif borrower.credit_score < 650:
        rate += 0.5

    # Upper bound applied last, so it wins if the two bounds cross
    rate = max(rate, market_rate * 0.8)
    rate = min(rate, base_rate * 1.5)

    return round(rate, 2)


def calculate_confidence_score(borrower: Borrower, lender: Lender, recommended_rate: float) -> int:
    """Confidence 0-100: base 70, adjusted for rate drift, risk and credit"""
    score = 70

    rate_diff = abs(recommended_rate - lender.interest_rate)
    if rate_diff < 1:
        score += 10
    elif rate_diff > 3:
        score -= 10

    if isinstance(borrower.risk, Assessed):
        if borrower.risk.score < 30:
            score += 15
        elif borrower.risk.score > 60:
            score -= 15

    if borrower.credit_score > 750:
        score += 10
    elif borrower.credit_score < 600:
        score -= 10

    return max(0, min(100, score))


def generate_recommendation_reasoning(
    borrower: Borrower,
    recommended_rate: float,
    recommended_term: int,
    confidence_score: int,
) -> str:
    if confidence_score >= 80:
        return (
            f"Highly confident recommendation based on {borrower.name}'s strong credit profile and "
            f"low risk score. The recommended rate of {recommended_rate}% over {recommended_term} months "
            f"provides a good balance between affordability and lender return."
        )
    elif confidence_score >= 60:
        return (
            f"Moderately confident recommendation. The {recommended_term}-month term with "
            f"{recommended_rate}% interest rate accounts for {borrower.name}'s risk profile while "
            f"remaining competitive with market rates."
        )
    else:
        return (
            f"This recommendation comes with lower confidence due to {borrower.name}'s higher risk "
            f"profile. The {recommended_rate}% rate reflects this risk while still providing a viable "
            f"loan option over {recommended_term} months."
        )


def build_recommendation(
    borrower: Borrower,
    lender: Lender,
    market_rates: MarketRates,
) -> Optional[LoanRecommendation]:
    """Evaluate one pair; None when the pair is not eligible"""
    if not is_eligible(borrower, lender):
        return None

    term = find_best_loan_term(borrower, lender)
    market_rate = market_rates.get(term, lender.interest_rate)
    rate = calculate_recommended_rate(borrower, lender, market_rate)
    payments = calculate_loan_payments(borrower.loan_amount, rate, term)
    confidence = calculate_confidence_score(borrower, lender, rate)

    return LoanRecommendation(
        borrower_id=borrower.id,
        lender_id=lender.id,
        borrower_name=borrower.name,
        lender_name=lender.name,
        recommended_interest_rate=rate,
        recommended_term=term,
        estimated_monthly_payment=payments.monthly_payment,
        total_interest_paid=payments.total_interest,
        confidence_score=confidence,
        reasoning=generate_recommendation_reasoning(borrower, rate, term, confidence),
    )


def generate_loan_recommendations(
    borrowers: Sequence[Borrower],
    lenders: Sequence[Lender],
    market_rates: MarketRates,
) -> List[LoanRecommendation]:
    """
    Main entry point: recommend terms for every eligible pair.

    Output follows borrower-then-lender input order. A pair that fails to
    evaluate is logged and skipped.
    """
    recommendations: List[LoanRecommendation] = []

    for borrower in borrowers:
        for lender in lenders:
            try:
                recommendation = build_recommendation(borrower, lender, market_rates)
            except RECORD_ERRORS as e:
                logger.warning(
                    f"Skipping pair during recommendation: {e}",
                    extra={"stage": "recommendation", "borrower_id": borrower.id, "lender_id": lender.id},
                )
                continue

            if recommendation is not None:
                recommendations.append(recommendation)

    return recommendations
