"""POST /v1/synthetic - Generate demo borrowers and lenders"""

import random
from fastapi import APIRouter, HTTPException

from lendmatch_gateway.api.v1.schemas import BorrowerSchema, LenderSchema, SyntheticRequest, SyntheticResponse
from lendmatch_gateway.domain.pipeline import assess_borrowers
from lendmatch_gateway.domain.synthetic import SequentialIdGenerator, SyntheticDataGenerator
from lendmatch_gateway.config import settings

router = APIRouter()


@router.post("/synthetic", response_model=SyntheticResponse)
def generate_synthetic_data(request_body: SyntheticRequest):
    """
    Generate range-valid demo records.

    Borrowers come back risk-assessed. With a seed, both records and ids
    (b-1, l-1, ...) are reproducible.
    """
    if request_body.borrowers + request_body.lenders > settings.synthetic_max_records:
        raise HTTPException(
            status_code=422,
            detail=f"At most {settings.synthetic_max_records} records per request",
        )

    if request_body.seed is not None:
        generator = SyntheticDataGenerator(
            rng=random.Random(request_body.seed),
            borrower_ids=SequentialIdGenerator("b"),
            lender_ids=SequentialIdGenerator("l"),
        )
    else:
        generator = SyntheticDataGenerator()

    borrowers, _ = assess_borrowers(generator.generate_borrowers(request_body.borrowers))
    lenders = generator.generate_lenders(request_body.lenders)

    return SyntheticResponse(
        borrowers=[BorrowerSchema.from_domain(b) for b in borrowers],
        lenders=[LenderSchema.from_domain(lender) for lender in lenders],
    )
