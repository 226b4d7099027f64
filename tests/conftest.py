"""Pytest fixtures for testing"""

import httpx
import pytest
from fastapi.testclient import TestClient
from lendmatch_gateway.api.main import create_app
from lendmatch_gateway.api.dependencies import get_market_data_client
from lendmatch_gateway.domain.models import Borrower, Lender
from lendmatch_gateway.infrastructure.clients.market_data import FinancialDataClient
from mocks.market_server.main import app as market_app

MOCK_MARKET_BASE = "http://mock-market"


def _build_borrower(**overrides) -> Borrower:
    """Solid mid-range borrower; override any field"""
    fields = dict(
        id="b-1",
        name="Mary Smith",
        email="mary.smith@example.com",
        loan_amount=5000,
        loan_purpose="education",
        loan_term=12,
        credit_score=700,
        income=60000,
        employment_status="full_time",
        debt_to_income_ratio=20,
        housing_status="rent",
    )
    fields.update(overrides)
    return Borrower(**fields)


def _build_lender(**overrides) -> Lender:
    """Lender with a broad policy; override any field"""
    fields = dict(
        id="l-1",
        name="John Brown",
        email="john.brown@example.com",
        amount_to_lend=20000,
        min_credit_score=650,
        interest_rate=8.0,
        max_risk_tolerance=50,
        preferred_purposes=("education", "business"),
        loan_terms=(12, 24),
    )
    fields.update(overrides)
    return Lender(**fields)


@pytest.fixture
def make_borrower():
    """Factory for domain borrowers"""
    return _build_borrower


@pytest.fixture
def make_lender():
    """Factory for domain lenders"""
    return _build_lender


@pytest.fixture
def market_data_client() -> FinancialDataClient:
    """Data client wired to the mock market server in-process"""
    return FinancialDataClient(
        base_url=MOCK_MARKET_BASE,
        transport=httpx.ASGITransport(app=market_app),
    )


@pytest.fixture
def client(market_data_client: FinancialDataClient) -> TestClient:
    """Create FastAPI test client backed by the mock market server"""
    app = create_app()
    app.dependency_overrides[get_market_data_client] = lambda: market_data_client
    return TestClient(app)


@pytest.fixture
def borrower_payload() -> dict:
    """Borrower request body in API shape"""
    return {
        "name": "Mary Smith",
        "email": "mary.smith@example.com",
        "loan_amount": 5000,
        "loan_purpose": "education",
        "loan_term": 12,
        "credit_score": 800,
        "income": 100000,
        "employment_status": "full_time",
        "debt_to_income_ratio": 10,
        "housing_status": "own",
    }


@pytest.fixture
def lender_payload() -> dict:
    """Lender request body in API shape"""
    return {
        "name": "John Brown",
        "email": "john.brown@example.com",
        "amount_to_lend": 20000,
        "min_credit_score": 650,
        "interest_rate": 8.0,
        "max_risk_tolerance": 50,
        "preferred_purposes": ["education"],
        "loan_terms": ["12", "24"],
    }
