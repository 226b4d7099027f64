"""Fixed-rate loan amortization: payment summary and repayment schedule"""

from datetime import date
from typing import List
from lendmatch_gateway.domain.models import LoanPayments, ScheduledPayment
from lendmatch_gateway.utils.date_utils import add_months, generate_monthly_dates


def monthly_rate(annual_rate: float) -> float:
    """Annual percentage rate → periodic (monthly) decimal rate"""
    return annual_rate / 100 / 12


def calculate_loan_payments(principal: float, annual_rate: float, term_months: int) -> LoanPayments:
    """
    Standard annuity formula.

        i = annual_rate / 100 / 12
        payment = P * i * (1 + i)^n / ((1 + i)^n - 1)

    Total interest is derived from the rounded payment so that
    ``monthly_payment * term - principal`` reproduces it to the cent.
    A 0% rate degenerates to straight division with no interest.
    """
    if term_months <= 0:
        raise ValueError(f"Loan term must be positive, got {term_months}")

    i = monthly_rate(annual_rate)

    if i == 0:
        return LoanPayments(monthly_payment=round(principal / term_months, 2), total_interest=0.0)

    growth = (1 + i) ** term_months
    payment = round(principal * i * growth / (growth - 1), 2)
    total_interest = round(payment * term_months - principal, 2)

    return LoanPayments(monthly_payment=payment, total_interest=total_interest)


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    term_months: int,
    start_date: date | None = None,
) -> List[ScheduledPayment]:
    """
    Generate one row per month for a fixed-rate loan.

    Requirements:
    - Level payment from calculate_loan_payments
    - Monthly due dates (calendar months, day clamped to month end)
    - Last payment absorbs rounding remainder so the balance ends at exactly 0

    Args:
        principal: Amount borrowed
        annual_rate: APR in percent
        term_months: Number of monthly payments
        start_date: First due date (default: one month from today)

    Example:
        $1000 at 0% over 3 months → [333.33, 333.33, 333.34]
    """
    if principal <= 0 or term_months <= 0:
        return []

    if start_date is None:
        start_date = add_months(date.today(), 1)

    i = monthly_rate(annual_rate)
    level_payment = calculate_loan_payments(principal, annual_rate, term_months).monthly_payment

    schedule = []
    balance = round(principal, 2)
    for number, due_date in enumerate(generate_monthly_dates(start_date, term_months), start=1):
        interest = round(balance * i, 2)

        if number == term_months:
            # Final payment clears whatever is left
            principal_part = balance
        else:
            principal_part = min(balance, round(level_payment - interest, 2))

        balance = round(balance - principal_part, 2)
        schedule.append(
            ScheduledPayment(
                number=number,
                due_date=due_date,
                payment=round(principal_part + interest, 2),
                interest=interest,
                principal=principal_part,
                remaining_balance=balance,
            )
        )

    return schedule
