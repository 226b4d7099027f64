"""Unit tests for the financial data HTTP client"""

import httpx
import pytest
from lendmatch_gateway.domain.exceptions import MarketDataAPIError
from lendmatch_gateway.infrastructure.clients.market_data import FinancialDataClient


def _client_returning(handler) -> FinancialDataClient:
    return FinancialDataClient(base_url="http://market", transport=httpx.MockTransport(handler))


async def test_get_market_rates_parses_term_keys(market_data_client: FinancialDataClient):
    """Test string term keys from the wire become integer months"""
    rates = await market_data_client.get_market_rates()

    assert rates == {3: 5.25, 6: 5.75, 12: 6.25, 24: 6.75, 36: 7.25, 48: 7.75, 60: 8.25}


async def test_simulated_bureau_lookups(market_data_client: FinancialDataClient):
    """Test simulated credit, bank and economy endpoints stay in range"""
    score = await market_data_client.get_credit_score("user_1")
    verified = await market_data_client.verify_bank_account("12345678")
    indicators = await market_data_client.get_economic_indicators()

    assert 300 <= score <= 850
    assert isinstance(verified, bool)
    assert 2 <= indicators["inflation"] <= 5
    assert 3 <= indicators["unemployment"] <= 7
    assert 1 <= indicators["gdp_growth"] <= 4


async def test_get_market_rates_http_error():
    """Test 5xx from the source is wrapped"""
    client = _client_returning(lambda request: httpx.Response(503))

    with pytest.raises(MarketDataAPIError, match="503"):
        await client.get_market_rates()


async def test_get_market_rates_timeout():
    """Test timeouts are wrapped"""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client_returning(handler)

    with pytest.raises(MarketDataAPIError, match="timeout"):
        await client.get_market_rates()


async def test_get_market_rates_malformed_payload():
    """Test payloads without a rate table are rejected"""
    client = _client_returning(lambda request: httpx.Response(200, json={"rates": {"twelve": "high"}}))

    with pytest.raises(MarketDataAPIError, match="Invalid market rate data"):
        await client.get_market_rates()

    client = _client_returning(lambda request: httpx.Response(200, text="not json"))

    with pytest.raises(MarketDataAPIError, match="Invalid JSON"):
        await client.get_market_rates()
