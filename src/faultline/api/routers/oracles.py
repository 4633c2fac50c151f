"""Oracle listing endpoint: GET /oracles."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from faultline.api.deps import get_validation_service
from faultline.api.schemas import OracleListResponse
from faultline.locator.completer import available_completers
from faultline.oracle import OracleRegistry
from faultline.service.validation import ValidationService

router = APIRouter()


@router.get("", response_model=OracleListResponse)
async def list_oracles(
    service: ValidationService = Depends(get_validation_service),  # noqa: B008
) -> OracleListResponse:
    """List registered oracles, the active one, and completer strategies."""
    return OracleListResponse(
        oracles=OracleRegistry.available(),
        active=service.oracle.name,
        completers=available_completers(),
    )
