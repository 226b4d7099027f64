"""Borrower/lender eligibility filter shared by matching and recommendation"""

from lendmatch_gateway.domain.models import Assessed, Borrower, Lender


def is_eligible(borrower: Borrower, lender: Lender) -> bool:
    """
    A pair is considered only when all of these hold:

    - borrower's credit score meets the lender's minimum
    - lender can fund the full requested amount
    - loan purpose is one the lender prefers
    - assessed risk is within the lender's tolerance (unassessed borrowers pass)
    """
    if lender.min_credit_score > borrower.credit_score:
        return False
    if lender.amount_to_lend < borrower.loan_amount:
        return False
    if borrower.loan_purpose not in lender.preferred_purposes:
        return False

    if isinstance(borrower.risk, Assessed):
        return borrower.risk.score <= lender.max_risk_tolerance
    return True
