"""Fault localization endpoints: POST /faults and POST /validate."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from faultline.api.deps import get_validation_service
from faultline.api.schemas import (
    LocateRequest,
    LocateResponse,
    ValidateRequest,
    ValidateResponse,
)
from faultline.locator.bisect import InvalidSourceError
from faultline.locator.completer import UnsupportedCompleterError
from faultline.oracle import OracleError
from faultline.service.validation import ValidationService

router = APIRouter()


@router.post("/faults", response_model=LocateResponse)
def locate_fault(
    body: LocateRequest,
    service: ValidationService = Depends(get_validation_service),  # noqa: B008
) -> LocateResponse:
    """Find the earliest line that makes the DRL source invalid."""
    try:
        fault = service.locate(body.source, completer=body.completer)
    except InvalidSourceError as exc:
        raise HTTPException(
            status_code=422, detail={"error": "INVALID_SOURCE", "message": str(exc)}
        ) from exc
    except UnsupportedCompleterError as exc:
        raise HTTPException(
            status_code=400, detail={"error": "UNSUPPORTED_COMPLETER", "message": str(exc)}
        ) from exc
    return LocateResponse(found=fault is not None, fault=fault)


@router.post("/validate", response_model=ValidateResponse)
def validate_source(
    body: ValidateRequest,
    service: ValidationService = Depends(get_validation_service),  # noqa: B008
) -> ValidateResponse:
    """Report every oracle message and, if invalid, the located fault."""
    if not body.source.strip():
        raise HTTPException(
            status_code=422,
            detail={"error": "INVALID_SOURCE", "message": "DRL code cannot be null or empty"},
        )
    try:
        report = service.verify(body.source)
    except OracleError as exc:
        raise HTTPException(
            status_code=502, detail={"error": "ORACLE_FAILED", "message": str(exc)}
        ) from exc
    fault = None if report.valid else service.locate(body.source)
    return ValidateResponse(valid=report.valid, errors=report.errors, fault=fault)
