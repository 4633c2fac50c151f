"""Structured oracle diagnostics with DRL source position tracking."""

from __future__ import annotations

from pydantic import BaseModel


class SourceSpan(BaseModel):
    """Points to a location in DRL source for error reporting."""

    line: int
    column: int
    end_line: int | None = None
    end_column: int | None = None


class SyntaxIssue(BaseModel):
    """A single problem reported by an oracle, with optional source position."""

    code: str
    message: str
    span: SourceSpan | None = None

    def render(self) -> str:
        if self.span is None:
            return self.message
        return f"[line {self.span.line}:{self.span.column}] {self.message}"


class OracleReport(BaseModel):
    """Everything an oracle said about one document."""

    valid: bool
    errors: list[str] = []
