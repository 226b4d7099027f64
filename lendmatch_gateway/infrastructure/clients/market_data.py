"""Financial data HTTP client for market rates and simulated bureau lookups"""

import httpx
from typing import Any, Dict
from lendmatch_gateway.domain.exceptions import MarketDataAPIError
from lendmatch_gateway.config import settings


class FinancialDataClient:
    """Client for the external market-rate and credit data API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.market_data_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def _get(self, path: str, params: Dict[str, Any] | None = None) -> Any:
        """
        GET a JSON document from the data source.

        Raises:
            MarketDataAPIError: On timeout, HTTP errors, or network failure
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(f"{self.base_url}{path}", params=params)
                response.raise_for_status()
                return response.json()

            except httpx.TimeoutException as e:
                raise MarketDataAPIError(f"Market data API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise MarketDataAPIError(f"Market data API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise MarketDataAPIError(f"Market data API unreachable: {e}") from e
            except ValueError as e:
                raise MarketDataAPIError(f"Invalid JSON from market data API: {e}") from e

    async def get_market_rates(self) -> Dict[int, float]:
        """Fetch annual rates keyed by term length in months"""
        data = await self._get("/market/rates")
        try:
            return {int(term): float(rate) for term, rate in data["rates"].items()}
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise MarketDataAPIError(f"Invalid market rate data: {e}") from e

    async def get_credit_score(self, user_id: str) -> int:
        data = await self._get("/credit/score", params={"user_id": user_id})
        try:
            return int(data["credit_score"])
        except (KeyError, ValueError, TypeError) as e:
            raise MarketDataAPIError(f"Invalid credit score data: {e}") from e

    async def verify_bank_account(self, account_number: str) -> bool:
        data = await self._get("/bank/verification", params={"account_number": account_number})
        try:
            return bool(data["verified"])
        except (KeyError, TypeError) as e:
            raise MarketDataAPIError(f"Invalid bank verification data: {e}") from e

    async def get_economic_indicators(self) -> Dict[str, float]:
        data = await self._get("/economy/indicators")
        try:
            return {
                "inflation": float(data["inflation"]),
                "unemployment": float(data["unemployment"]),
                "gdp_growth": float(data["gdp_growth"]),
            }
        except (KeyError, ValueError, TypeError) as e:
            raise MarketDataAPIError(f"Invalid economic indicator data: {e}") from e
