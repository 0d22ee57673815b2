"""Fee schedule endpoints."""

from fastapi import APIRouter, HTTPException, Request

from app.logging_config import get_logger
from app.models import FeeCalculationRequest, FeeCalculationResponse, FeeSettings
from app.services.fees import calculate_fee

logger = get_logger(__name__)

router = APIRouter(prefix="/api/fees")


@router.get("/settings", response_model=FeeSettings)
async def get_fee_settings(request: Request) -> FeeSettings:
    """Return the current fee schedule."""
    return request.app.state.fee_settings


@router.put("/settings", response_model=FeeSettings)
async def update_fee_settings(new_settings: FeeSettings, request: Request) -> FeeSettings:
    """Replace the fee schedule; later calculations use it immediately."""
    request.app.state.fee_settings = new_settings
    logger.info("Fee settings updated (type=%s)", new_settings.fee_type)
    return new_settings


@router.post("/calculate", response_model=FeeCalculationResponse)
async def calculate(
    body: FeeCalculationRequest,
    request: Request,
) -> FeeCalculationResponse:
    """Calculate the fee for an NZD dollar amount."""
    if body.amount_nzd < 0:
        raise HTTPException(status_code=400, detail="amountNzd must be a positive number")
    fee = calculate_fee(body.amount_nzd, request.app.state.fee_settings)
    return FeeCalculationResponse(fee_nzd=fee)
