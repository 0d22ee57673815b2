"""Remittance Compliance API.

Back office service for a money-transfer agency: customer onboarding,
transaction capture with AML/KYC validation, PTR flagging, fees and
exchange rates.

Run with:
    python3 -m uvicorn app.main:app --host 0.0.0.0 --port 8000
"""

from datetime import datetime, timezone
from typing import Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.compliance.validator import ComplianceValidator
from app.config import (
    AppSettings,
    load_compliance_config,
    load_default_rates,
    load_fee_settings,
)
from app.logging_config import get_logger, setup_logging
from app.models import ValidationFailedResponse, Violation
from app.routes import aml, audit, customers, exchange_rates, fees, rules, transactions
from app.storage.memory import MemoryStore

logger = get_logger(__name__)

app = FastAPI(
    title="Remittance Compliance API",
    description=(
        "Customer onboarding and remittance capture for a money-transfer "
        "agency. Validates age, phone and email formats, amounts, payout "
        "currency and the enhanced AML field set for transfers of "
        "NZD 1,000 or more."
    ),
    version="1.0.0",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@app.on_event("startup")
async def startup() -> None:
    """Load configuration and initialize the validator and store."""
    settings = AppSettings()
    setup_logging(settings.log_level)

    config = load_compliance_config(settings.data_dir)
    fee_settings = load_fee_settings(settings.data_dir)
    default_rates = load_default_rates(settings.data_dir)

    # Attach to app state for dependency injection in routes
    app.state.validator = ComplianceValidator(config)
    app.state.store = MemoryStore()
    app.state.fee_settings = fee_settings
    app.state.default_rates = default_rates
    app.state.clock = utc_now

    logger.info(
        "Compliance API started (data_dir=%s, enhanced_aml_threshold_cents=%d)",
        settings.data_dir,
        config.enhanced_aml_threshold_cents,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report unparseable bodies with the same 400 shape as rule violations."""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        field = ".".join(loc[1:]) or (loc[0] if loc else "body")
        details.append(
            Violation(
                field=field,
                kind="REQUIRED" if err.get("type") == "missing" else "INVALID_TYPE",
                message=err.get("msg", "Invalid value"),
            )
        )
    body = ValidationFailedResponse(details=details)
    return JSONResponse(
        status_code=400, content=body.model_dump(mode="json", by_alias=True)
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


# Mount all API routers
app.include_router(transactions.router)
app.include_router(customers.router)
app.include_router(fees.router)
app.include_router(exchange_rates.router)
app.include_router(rules.router)
app.include_router(audit.router)
app.include_router(aml.router)


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "healthy"}
