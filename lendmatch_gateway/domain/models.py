"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Dict, List, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class Assessed:
    """Borrower whose risk has been scored (0 = safest, 100 = riskiest)"""

    score: int


@dataclass(frozen=True)
class Unassessed:
    """Borrower that has not been through risk assessment yet"""

    pass


UNASSESSED = Unassessed()

RiskStatus = Union[Assessed, Unassessed]

# Annual percentage rate keyed by term length in months
MarketRates = Mapping[int, float]


@dataclass(frozen=True)
class Borrower:
    """Individual requesting a loan"""

    id: str
    name: str
    email: str
    loan_amount: float
    loan_purpose: str
    loan_term: int  # months
    credit_score: int  # 300-850
    income: float
    employment_status: str
    debt_to_income_ratio: float  # percent, 0-100
    housing_status: str
    risk: RiskStatus = UNASSESSED

    @property
    def risk_score(self) -> Optional[int]:
        return self.risk.score if isinstance(self.risk, Assessed) else None

    def with_risk_score(self, score: int) -> "Borrower":
        """Return a copy carrying the given risk score"""
        return replace(self, risk=Assessed(score))


@dataclass(frozen=True)
class Lender:
    """Individual offering capital under a lending policy"""

    id: str
    name: str
    email: str
    amount_to_lend: float
    min_credit_score: int
    interest_rate: float  # base/ask APR in percent
    max_risk_tolerance: int  # 0-100
    preferred_purposes: Tuple[str, ...]
    loan_terms: Tuple[int, ...]  # allowed terms in months, in the lender's order


@dataclass(frozen=True)
class RiskFactors:
    """Per-factor risk impacts, each 0-100 (higher = riskier)"""

    credit_score_impact: float
    debt_to_income_impact: float
    employment_status_impact: float
    loan_amount_impact: float
    income_impact: float


@dataclass(frozen=True)
class RiskAssessment:
    """Output of risk assessment"""

    risk_score: int
    risk_band: str
    risk_factors: RiskFactors
    explanation: str


@dataclass(frozen=True)
class Match:
    """Eligible borrower/lender pair with compatibility score"""

    borrower_id: str
    lender_id: str
    borrower_name: str
    lender_name: str
    borrower_credit_score: int
    borrower_risk_score: Optional[int]
    lender_min_credit_score: int
    lender_max_risk_tolerance: int
    loan_amount: float
    lending_amount: float
    loan_purpose: str
    interest_rate: float
    match_score: int
    ai_reasoning: str


@dataclass(frozen=True)
class LoanPayments:
    """Fixed-rate amortization summary"""

    monthly_payment: float
    total_interest: float


@dataclass(frozen=True)
class LoanRecommendation:
    """Proposed loan terms for an eligible borrower/lender pair"""

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


@dataclass(frozen=True)
class ScheduledPayment:
    """Single monthly payment in an amortization schedule"""

    number: int
    due_date: date
    payment: float
    interest: float
    principal: float
    remaining_balance: float


@dataclass
class PipelineResult:
    """Output of one full assess/match/recommend run"""

    borrowers: List[Borrower]
    matches: List[Match]
    recommendations: List[LoanRecommendation]
    risk_assessments: Dict[str, RiskAssessment] = field(default_factory=dict)
