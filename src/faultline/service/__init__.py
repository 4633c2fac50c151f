"""Service layer reusable by the REST API, MCP server and CLI."""

from faultline.service.validation import RuleValidationError, ValidationService, build_oracle

__all__ = [
    "RuleValidationError",
    "ValidationService",
    "build_oracle",
]
