"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from faultline.models.fault import FaultLocation


class LocateRequest(BaseModel):
    """Request body for POST /faults."""

    source: str = Field(description="DRL source text to search")
    completer: str | None = Field(
        default=None, description="Prefix completion strategy (structural | naive)"
    )


class LocateResponse(BaseModel):
    """Response body for POST /faults."""

    found: bool
    fault: FaultLocation | None = None


class ValidateRequest(BaseModel):
    """Request body for POST /validate."""

    source: str = Field(description="DRL source text to validate")


class ValidateResponse(BaseModel):
    """Response body for POST /validate."""

    valid: bool
    errors: list[str] = []
    fault: FaultLocation | None = None


class OracleListResponse(BaseModel):
    """Response for GET /oracles."""

    oracles: list[str] = []
    active: str
    completers: list[str] = []


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""
