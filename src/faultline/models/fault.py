"""The fault report returned by the locator."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class FaultLocation(BaseModel):
    """The earliest line whose inclusion makes the document invalid."""

    model_config = ConfigDict(frozen=True)

    faulty_content: str = Field(description="Trimmed text of the offending line")
    line_number: int = Field(ge=1, description="1-based line number")
    error_message: str = Field(description="Oracle's first error for the minimal failing prefix")

    def __str__(self) -> str:
        return (
            f"Fault found at line {self.line_number}: {self.error_message}\n"
            f"Faulty content: {self.faulty_content}"
        )
