"""POST /v1/schedule - Amortization schedule for a fixed-rate loan"""

from fastapi import APIRouter

from lendmatch_gateway.api.v1.schemas import ScheduleRequest, ScheduleResponse, ScheduledPaymentSchema
from lendmatch_gateway.domain.amortization import calculate_loan_payments, generate_amortization_schedule

router = APIRouter()


@router.post("/schedule", response_model=ScheduleResponse)
def create_schedule(request_body: ScheduleRequest):
    """
    Build the month-by-month repayment schedule.

    Returns:
        Level payment, total interest and one row per month
    """
    payments = calculate_loan_payments(request_body.principal, request_body.annual_rate, request_body.term_months)
    schedule = generate_amortization_schedule(
        request_body.principal,
        request_body.annual_rate,
        request_body.term_months,
        start_date=request_body.start_date,
    )

    return ScheduleResponse(
        monthly_payment=payments.monthly_payment,
        total_interest=payments.total_interest,
        payments=[ScheduledPaymentSchema.model_validate(p) for p in schedule],
    )
