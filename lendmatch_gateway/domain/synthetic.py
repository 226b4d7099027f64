"""Synthetic borrower/lender generation for demos"""

import itertools
import random
import uuid
from typing import Callable, List, Optional
from lendmatch_gateway.domain.models import Borrower, Lender

FIRST_NAMES = [
    "James", "Mary", "John", "Patricia", "Robert", "Jennifer", "Michael", "Linda",
    "William", "Elizabeth", "David", "Susan", "Richard", "Jessica", "Joseph", "Sarah",
    "Thomas", "Karen", "Charles", "Nancy", "Christopher", "Lisa", "Daniel", "Margaret",
]
LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Jones", "Brown", "Davis", "Miller", "Wilson",
    "Moore", "Taylor", "Anderson", "Thomas", "Jackson", "White", "Harris", "Martin",
]
EMAIL_DOMAINS = ["gmail.com", "yahoo.com", "outlook.com", "hotmail.com", "example.com"]

LOAN_PURPOSES = [
    "education", "business", "home_improvement", "debt_consolidation",
    "medical", "vehicle", "wedding", "vacation", "other",
]
EMPLOYMENT_STATUSES = ["full_time", "part_time", "self_employed", "unemployed", "retired", "student"]
HOUSING_STATUSES = ["own", "mortgage", "rent", "living_with_parents", "other"]
STANDARD_TERMS = [3, 6, 12, 24, 36, 48, 60]

IdGenerator = Callable[[], str]


class SequentialIdGenerator:
    """Deterministic ids: b-1, b-2, ..."""

    def __init__(self, prefix: str, start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


class UUIDIdGenerator:
    """Globally unique ids: b-<uuid4>"""

    def __init__(self, prefix: str):
        self.prefix = prefix

    def __call__(self) -> str:
        return f"{self.prefix}-{uuid.uuid4()}"


class SyntheticDataGenerator:
    """
    Generates range-valid borrowers and lenders.

    Pass a seeded ``random.Random`` and sequential id generators for
    reproducible output.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        borrower_ids: Optional[IdGenerator] = None,
        lender_ids: Optional[IdGenerator] = None,
    ):
        self.rng = rng or random.Random()
        self.borrower_ids = borrower_ids or UUIDIdGenerator("b")
        self.lender_ids = lender_ids or UUIDIdGenerator("l")

    def _name(self) -> str:
        return f"{self.rng.choice(FIRST_NAMES)} {self.rng.choice(LAST_NAMES)}"

    def _email(self, name: str) -> str:
        first, last = name.lower().split(" ")
        return f"{first}.{last}{self.rng.randint(0, 999)}@{self.rng.choice(EMAIL_DOMAINS)}"

    def _debt_to_income(self, employment_status: str) -> int:
        # Stable employment carries less debt on average
        if employment_status in ("full_time", "self_employed"):
            return self.rng.randint(10, 40)
        elif employment_status in ("part_time", "retired"):
            return self.rng.randint(20, 60)
        return self.rng.randint(30, 80)

    def generate_borrower(self) -> Borrower:
        name = self._name()
        income = self.rng.randint(20_000, 150_000)
        employment_status = self.rng.choice(EMPLOYMENT_STATUSES)

        # Loan size scales with income
        max_loan = int(min(income * 0.8, 100_000))
        min_loan = int(max(1000, income * 0.05))

        return Borrower(
            id=self.borrower_ids(),
            name=name,
            email=self._email(name),
            loan_amount=self.rng.randint(min_loan, max_loan),
            loan_purpose=self.rng.choice(LOAN_PURPOSES),
            loan_term=self.rng.choice(STANDARD_TERMS),
            credit_score=self.rng.randint(500, 850),
            income=income,
            employment_status=employment_status,
            debt_to_income_ratio=self._debt_to_income(employment_status),
            housing_status=self.rng.choice(HOUSING_STATUSES),
        )

    def generate_lender(self) -> Lender:
        name = self._name()
        interest_rate = self.rng.randint(4, 20) + self.rng.random()

        return Lender(
            id=self.lender_ids(),
            name=name,
            email=self._email(name),
            amount_to_lend=self.rng.randint(10_000, 500_000),
            min_credit_score=self.rng.randint(580, 720),
            interest_rate=round(interest_rate, 2),
            max_risk_tolerance=self.rng.randint(20, 80),
            preferred_purposes=tuple(self.rng.sample(LOAN_PURPOSES, self.rng.randint(1, 5))),
            loan_terms=tuple(self.rng.sample(STANDARD_TERMS, self.rng.randint(1, 4))),
        )

    def generate_borrowers(self, count: int) -> List[Borrower]:
        return [self.generate_borrower() for _ in range(count)]

    def generate_lenders(self, count: int) -> List[Lender]:
        return [self.generate_lender() for _ in range(count)]
