"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Annotated, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from lendmatch_gateway.domain.models import Assessed, Borrower, Lender, UNASSESSED
from lendmatch_gateway.domain.synthetic import IdGenerator

PositiveTerm = Annotated[int, Field(gt=0, description="Loan term in months")]
MarketRate = Annotated[float, Field(ge=0, le=100, description="Annual market rate in percent")]


class BorrowerSchema(BaseModel):
    """Borrower profile as submitted by the presentation layer"""

    id: Optional[str] = Field(None, description="Assigned by the service when omitted")
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    loan_amount: float = Field(..., gt=0)
    loan_purpose: str = Field(..., min_length=1)
    loan_term: PositiveTerm
    credit_score: int = Field(..., ge=300, le=850)
    income: float = Field(..., gt=0)
    employment_status: str
    debt_to_income_ratio: float = Field(..., ge=0, le=100)
    housing_status: str = "other"
    risk_score: Optional[int] = Field(None, ge=0, le=100, description="Absent until assessed")

    def to_domain(self, id_generator: IdGenerator) -> Borrower:
        return Borrower(
            id=self.id or id_generator(),
            name=self.name,
            email=self.email,
            loan_amount=self.loan_amount,
            loan_purpose=self.loan_purpose,
            loan_term=self.loan_term,
            credit_score=self.credit_score,
            income=self.income,
            employment_status=self.employment_status,
            debt_to_income_ratio=self.debt_to_income_ratio,
            housing_status=self.housing_status,
            risk=Assessed(self.risk_score) if self.risk_score is not None else UNASSESSED,
        )

    @classmethod
    def from_domain(cls, borrower: Borrower) -> "BorrowerSchema":
        return cls(
            id=borrower.id,
            name=borrower.name,
            email=borrower.email,
            loan_amount=borrower.loan_amount,
            loan_purpose=borrower.loan_purpose,
            loan_term=borrower.loan_term,
            credit_score=borrower.credit_score,
            income=borrower.income,
            employment_status=borrower.employment_status,
            debt_to_income_ratio=borrower.debt_to_income_ratio,
            housing_status=borrower.housing_status,
            risk_score=borrower.risk_score,
        )


class LenderSchema(BaseModel):
    """Lender policy as submitted by the presentation layer"""

    id: Optional[str] = Field(None, description="Assigned by the service when omitted")
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    amount_to_lend: float = Field(..., gt=0)
    min_credit_score: int = Field(..., ge=300, le=850)
    interest_rate: float = Field(..., gt=0, description="Base annual rate in percent")
    max_risk_tolerance: int = Field(..., ge=0, le=100)
    preferred_purposes: List[str] = Field(..., min_length=1)
    loan_terms: List[PositiveTerm] = Field(..., min_length=1)

    def to_domain(self, id_generator: IdGenerator) -> Lender:
        return Lender(
            id=self.id or id_generator(),
            name=self.name,
            email=self.email,
            amount_to_lend=self.amount_to_lend,
            min_credit_score=self.min_credit_score,
            interest_rate=self.interest_rate,
            max_risk_tolerance=self.max_risk_tolerance,
            preferred_purposes=tuple(self.preferred_purposes),
            loan_terms=tuple(self.loan_terms),
        )

    @classmethod
    def from_domain(cls, lender: Lender) -> "LenderSchema":
        return cls(
            id=lender.id,
            name=lender.name,
            email=lender.email,
            amount_to_lend=lender.amount_to_lend,
            min_credit_score=lender.min_credit_score,
            interest_rate=lender.interest_rate,
            max_risk_tolerance=lender.max_risk_tolerance,
            preferred_purposes=list(lender.preferred_purposes),
            loan_terms=list(lender.loan_terms),
        )


class RiskFactorsSchema(BaseModel):
    """Per-factor impacts, each 0-100"""

    model_config = ConfigDict(from_attributes=True)

    credit_score_impact: float
    debt_to_income_impact: float
    employment_status_impact: float
    loan_amount_impact: float
    income_impact: float


class RiskAssessmentResponse(BaseModel):
    """Response for POST /v1/risk/assess"""

    model_config = ConfigDict(from_attributes=True)

    borrower_id: str
    risk_score: int
    risk_band: str
    risk_factors: RiskFactorsSchema
    explanation: str


class MatchRequest(BaseModel):
    """Request body for POST /v1/matches"""

    borrowers: List[BorrowerSchema]
    lenders: List[LenderSchema]


class MatchSchema(BaseModel):
    """Single ranked match"""

    model_config = ConfigDict(from_attributes=True)

    borrower_id: str
    lender_id: str
    borrower_name: str
    lender_name: str
    borrower_credit_score: int
    borrower_risk_score: Optional[int] = None
    lender_min_credit_score: int
    lender_max_risk_tolerance: int
    loan_amount: float
    lending_amount: float
    loan_purpose: str
    interest_rate: float
    match_score: int
    ai_reasoning: str


class MatchResponse(BaseModel):
    """Response for POST /v1/matches"""

    matches: List[MatchSchema]


class RecommendationRequest(BaseModel):
    """Request body for POST /v1/recommendations and POST /v1/pipeline"""

    borrowers: List[BorrowerSchema]
    lenders: List[LenderSchema]
    market_rates: Optional[Dict[PositiveTerm, MarketRate]] = Field(
        None, description="APR by term in months; fetched from the data source when omitted"
    )


class RecommendationSchema(BaseModel):
    """Single loan recommendation"""

    model_config = ConfigDict(from_attributes=True)

    borrower_id: str
    lender_id: str
    borrower_name: str
    lender_name: str
    recommended_interest_rate: float
    recommended_term: int
    estimated_monthly_payment: float
    total_interest_paid: float
    confidence_score: int
    reasoning: str


class RecommendationResponse(BaseModel):
    """Response for POST /v1/recommendations"""

    market_rates: Dict[int, float]
    recommendations: List[RecommendationSchema]


class PipelineResponse(BaseModel):
    """Response for POST /v1/pipeline"""

    borrowers: List[BorrowerSchema]
    market_rates: Dict[int, float]
    matches: List[MatchSchema]
    recommendations: List[RecommendationSchema]


class ScheduleRequest(BaseModel):
    """Request body for POST /v1/schedule"""

    principal: float = Field(..., gt=0)
    annual_rate: float = Field(..., ge=0, description="APR in percent")
    term_months: PositiveTerm
    start_date: Optional[date] = None


class ScheduledPaymentSchema(BaseModel):
    """Single row of an amortization schedule"""

    model_config = ConfigDict(from_attributes=True)

    number: int
    due_date: date
    payment: float
    interest: float
    principal: float
    remaining_balance: float


class ScheduleResponse(BaseModel):
    """Response for POST /v1/schedule"""

    monthly_payment: float
    total_interest: float
    payments: List[ScheduledPaymentSchema]


class MarketRatesResponse(BaseModel):
    """Response for GET /v1/market/rates"""

    rates: Dict[int, float]


class SyntheticRequest(BaseModel):
    """Request body for POST /v1/synthetic"""

    borrowers: int = Field(10, ge=0)
    lenders: int = Field(5, ge=0)
    seed: Optional[int] = Field(None, description="Fix for reproducible records and ids")


class SyntheticResponse(BaseModel):
    """Response for POST /v1/synthetic"""

    borrowers: List[BorrowerSchema]
    lenders: List[LenderSchema]
