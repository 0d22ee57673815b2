"""Exchange-rate endpoints."""

from typing import Optional

from fastapi import APIRouter, Query, Request

from app.logging_config import get_logger
from app.models import ExchangeRates, ExchangeRatesResponse
from app.services.rates import resolve_rates

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


@router.get("/exchange-rates", response_model=ExchangeRatesResponse)
async def get_exchange_rates(
    request: Request,
    date: Optional[str] = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
) -> ExchangeRatesResponse:
    """Rates for a day (default: today in Pacific/Auckland).

    Days without recorded rates return the configured defaults with
    isDefault set.
    """
    state = request.app.state
    rates, is_default = resolve_rates(
        store=state.store,
        date_key=date,
        now=state.clock(),
        default_rates=state.default_rates,
        tz_name=state.validator.config.reference_timezone,
    )
    return ExchangeRatesResponse(rates=rates, is_default=is_default)


@router.post("/exchange-rates", status_code=201, response_model=ExchangeRates)
async def set_exchange_rates(rates: ExchangeRates, request: Request) -> ExchangeRates:
    """Record (or replace) the rates for a day."""
    request.app.state.store.set_rates(rates)
    logger.info("Exchange rates set for %s", rates.date_key)
    return rates
