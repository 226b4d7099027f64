"""GET /v1/market/rates - Current market interest rates by term"""

import logging
from typing import Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from lendmatch_gateway.api.v1.schemas import MarketRatesResponse
from lendmatch_gateway.api.dependencies import get_market_data_client, get_request_id
from lendmatch_gateway.infrastructure.clients.market_data import FinancialDataClient
from lendmatch_gateway.domain.exceptions import MarketDataAPIError
from lendmatch_gateway.infrastructure.observability.metrics import market_data_failures_counter
from lendmatch_gateway.config import settings

router = APIRouter()


async def resolve_market_rates(
    supplied: Optional[Dict[int, float]],
    client: FinancialDataClient,
    request_id: str,
) -> Dict[int, float]:
    """
    Rates to price with: the caller's if given, else the data source's,
    else the configured fallback table.
    """
    if supplied is not None:
        return dict(supplied)

    try:
        return await client.get_market_rates()
    except MarketDataAPIError as e:
        market_data_failures_counter.inc()
        logging.warning(f"Using fallback market rates: {e}", extra={"request_id": request_id})
        return dict(settings.fallback_market_rates)


@router.get("/market/rates", response_model=MarketRatesResponse)
async def get_market_rates(
    request: Request,
    client: FinancialDataClient = Depends(get_market_data_client),
):
    """Proxy the data source's current rate table"""
    try:
        rates = await client.get_market_rates()
    except MarketDataAPIError as e:
        market_data_failures_counter.inc()
        logging.error(f"Market data API error: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=503, detail="Market data service unavailable")

    return MarketRatesResponse(rates=rates)
