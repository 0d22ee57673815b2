"""Compliance configuration endpoints for reading and updating thresholds."""

from fastapi import APIRouter, Request

from app.logging_config import get_logger
from app.models import ComplianceConfig

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


@router.get("/rules", response_model=ComplianceConfig)
async def get_rules(request: Request) -> ComplianceConfig:
    """Return the current compliance configuration."""
    return request.app.state.validator.config


@router.put("/rules", response_model=ComplianceConfig)
async def update_rules(
    new_config: ComplianceConfig,
    request: Request,
) -> ComplianceConfig:
    """Update the compliance configuration.

    The validator picks up new thresholds on the next request.
    """
    request.app.state.validator.config = new_config
    logger.info(
        "Compliance config updated (enhanced_aml_threshold_cents=%d)",
        new_config.enhanced_aml_threshold_cents,
    )
    return new_config
