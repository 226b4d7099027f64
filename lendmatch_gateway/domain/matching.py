"""Matching engine - pairs borrowers with compatible lenders"""

import logging
from typing import List, Optional, Sequence
from lendmatch_gateway.domain.models import Assessed, Borrower, Lender, Match
from lendmatch_gateway.domain.eligibility import is_eligible
from lendmatch_gateway.domain.exceptions import RECORD_ERRORS, InvalidProfileError

logger = logging.getLogger(__name__)

BASE_MATCH_SCORE = 60

# (threshold, bonus) pairs, first match wins
CREDIT_MARGIN_BONUSES = [(100, 15), (50, 10), (20, 5)]
LOAN_RATIO_BONUSES = [(0.3, 15), (0.5, 10), (0.7, 5)]
RISK_MARGIN_BONUSES = [(30, 15), (15, 10), (5, 5)]


def _bonus_at_least(value: float, buckets: List[tuple]) -> int:
    for threshold, bonus in buckets:
        if value >= threshold:
            return bonus
    return 0


def _bonus_at_most(value: float, buckets: List[tuple]) -> int:
    for threshold, bonus in buckets:
        if value <= threshold:
            return bonus
    return 0


def calculate_match_score(borrower: Borrower, lender: Lender) -> int:
    """
    Score an eligible pair from 60 (bare minimum) up to 100.

    Bonuses:
    - Credit margin over the lender minimum: >=100 +15, >=50 +10, >=20 +5
    - Loan share of lender capacity: <=30% +15, <=50% +10, <=70% +5
    - Risk headroom under the lender tolerance: >=30 +15, >=15 +10, >=5 +5
      (skipped for unassessed borrowers)
    """
    if lender.amount_to_lend <= 0:
        raise InvalidProfileError(f"Lender {lender.id} has no lending capacity")

    score = BASE_MATCH_SCORE

    credit_margin = borrower.credit_score - lender.min_credit_score
    score += _bonus_at_least(credit_margin, CREDIT_MARGIN_BONUSES)

    loan_ratio = borrower.loan_amount / lender.amount_to_lend
    score += _bonus_at_most(loan_ratio, LOAN_RATIO_BONUSES)

    if isinstance(borrower.risk, Assessed):
        risk_margin = lender.max_risk_tolerance - borrower.risk.score
        score += _bonus_at_least(risk_margin, RISK_MARGIN_BONUSES)

    return min(score, 100)


def _money(amount: float) -> str:
    return f"${amount:,.0f}" if float(amount).is_integer() else f"${amount:,.2f}"


def generate_match_reasoning(borrower: Borrower, lender: Lender, match_score: int) -> str:
    if match_score >= 80:
        return (
            f"Excellent match! {borrower.name}'s credit score of {borrower.credit_score} significantly "
            f"exceeds {lender.name}'s minimum requirement of {lender.min_credit_score}. "
            f"The loan amount of {_money(borrower.loan_amount)} is well within {lender.name}'s "
            f"lending capacity of {_money(lender.amount_to_lend)}."
        )
    elif match_score >= 60:
        return (
            f"Good match. {borrower.name}'s credit score of {borrower.credit_score} meets "
            f"{lender.name}'s requirements. The loan purpose ({borrower.loan_purpose}) aligns with "
            f"the lender's preferences, though the risk profile could be better."
        )
    else:
        return (
            f"Acceptable match. {borrower.name} meets {lender.name}'s minimum requirements, but there "
            f"are some concerns regarding the risk profile and loan-to-lending ratio. "
            f"This match may require additional scrutiny."
        )


def build_match(borrower: Borrower, lender: Lender) -> Optional[Match]:
    """Evaluate one pair; None when the pair is not eligible"""
    if not is_eligible(borrower, lender):
        return None

    match_score = calculate_match_score(borrower, lender)

    return Match(
        borrower_id=borrower.id,
        lender_id=lender.id,
        borrower_name=borrower.name,
        lender_name=lender.name,
        borrower_credit_score=borrower.credit_score,
        borrower_risk_score=borrower.risk_score,
        lender_min_credit_score=lender.min_credit_score,
        lender_max_risk_tolerance=lender.max_risk_tolerance,
        loan_amount=borrower.loan_amount,
        lending_amount=lender.amount_to_lend,
        loan_purpose=borrower.loan_purpose,
        interest_rate=lender.interest_rate,
        match_score=match_score,
        ai_reasoning=generate_match_reasoning(borrower, lender, match_score),
    )


def match_borrowers_with_lenders(borrowers: Sequence[Borrower], lenders: Sequence[Lender]) -> List[Match]:
    """
    Main entry point: evaluate every borrower against every lender.

    Returns matches ranked by score, highest first. Equal scores keep
    borrower-then-lender input order. A pair that fails to evaluate is
    logged and skipped.
    """
    matches: List[Match] = []

    for borrower in borrowers:
        for lender in lenders:
            try:
                match = build_match(borrower, lender)
            except RECORD_ERRORS as e:
                logger.warning(
                    f"Skipping pair during matching: {e}",
                    extra={"stage": "matching", "borrower_id": borrower.id, "lender_id": lender.id},
                )
                continue

            if match is not None:
                matches.append(match)

    # sorted() is stable, reverse=True keeps input order among equal scores
    return sorted(matches, key=lambda m: m.match_score, reverse=True)
