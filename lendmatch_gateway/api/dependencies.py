"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from lendmatch_gateway.domain.synthetic import UUIDIdGenerator
from lendmatch_gateway.infrastructure.clients.market_data import FinancialDataClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_market_data_client() -> FinancialDataClient:
    """Provide market data API client instance"""
    return FinancialDataClient()


def get_borrower_id_generator() -> UUIDIdGenerator:
    """Ids for borrowers submitted without one"""
    return UUIDIdGenerator("b")


def get_lender_id_generator() -> UUIDIdGenerator:
    """Ids for lenders submitted without one"""
    return UUIDIdGenerator("l")
