"""Pydantic domain models for Faultline."""

from faultline.models.errors import OracleReport, SourceSpan, SyntaxIssue
from faultline.models.fault import FaultLocation

__all__ = [
    "FaultLocation",
    "OracleReport",
    "SourceSpan",
    "SyntaxIssue",
]
