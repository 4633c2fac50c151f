"""Validation service: the core layer shared by the REST API, MCP server and CLI."""

from __future__ import annotations

import logging
from typing import Any

from faultline.locator.bisect import FaultFinder, InvalidSourceError
from faultline.locator.completer import PrefixCompleter, get_completer
from faultline.models.errors import OracleReport
from faultline.models.fault import FaultLocation
from faultline.oracle import Oracle, OracleError, OracleRegistry
from faultline.settings import Settings

logger = logging.getLogger("faultline.service")

_PREVIEW_CHARS = 100


class RuleValidationError(ValueError):
    """Raised when DRL source fails validation.

    ``fault`` carries the located line when one could be isolated.
    """

    def __init__(self, message: str, fault: FaultLocation | None = None) -> None:
        self.fault = fault
        super().__init__(message)


def build_oracle(settings: Settings) -> Oracle:
    """Instantiate the oracle selected by *settings*."""
    options: dict[str, Any] = {}
    if settings.oracle == "http":
        options = {"url": settings.oracle_url, "timeout": settings.oracle_timeout_seconds}
    elif settings.oracle == "command":
        options = {"command": settings.oracle_command, "timeout": settings.oracle_timeout_seconds}
    return OracleRegistry.get(settings.oracle, **options)


class ValidationService:
    """Verifies DRL text and, when it fails, pinpoints the offending line."""

    def __init__(self, oracle: Oracle, completer: PrefixCompleter | None = None) -> None:
        self._oracle = oracle
        self._finder = FaultFinder(oracle, completer)

    @classmethod
    def from_settings(cls, settings: Settings) -> ValidationService:
        return cls(build_oracle(settings), get_completer(settings.completer))

    @property
    def oracle(self) -> Oracle:
        return self._oracle

    def close(self) -> None:
        self._oracle.close()

    def finder(self, completer: str | None = None) -> FaultFinder:
        """The configured finder, or one using the named *completer*."""
        if completer is None or completer == self._finder.completer.name:
            return self._finder
        return FaultFinder(self._oracle, get_completer(completer))

    def locate(self, source: str, completer: str | None = None) -> FaultLocation | None:
        return self.finder(completer).find_faulty_line(source)

    def verify(self, source: str) -> OracleReport:
        """All messages the oracle has for *source*.  Oracle failures propagate."""
        errors = self._oracle.errors(source)
        return OracleReport(valid=not errors, errors=errors)

    def validate_structure(self, source: str | None) -> str:
        """Return ``"Code looks good"`` or raise :class:`RuleValidationError`."""
        logger.info("Starting DRL validation for code with length: %d", len(source or ""))
        if source is None or not source.strip():
            logger.warning("DRL validation failed: null or empty code provided")
            raise RuleValidationError("DRL code cannot be null or empty")

        logger.debug(
            "DRL code to validate: %s%s",
            source[:_PREVIEW_CHARS],
            "..." if len(source) > _PREVIEW_CHARS else "",
        )
        try:
            report = self.verify(source)
        except OracleError as exc:
            logger.error("Oracle failed during validation: %s", exc)
            fault = self._locate_quietly(source)
            if fault is not None:
                raise RuleValidationError(
                    f"DRL syntax error at line {fault.line_number}: {fault.error_message}\n"
                    f"Faulty content: {fault.faulty_content}\n"
                    f"Original error: {exc}",
                    fault,
                ) from exc
            raise RuleValidationError(f"Failed to validate DRL code: {exc}") from exc

        if report.valid:
            logger.info("DRL validation completed successfully")
            return "Code looks good"

        verifier_result = "\n".join(f"ERROR: {message}" for message in report.errors)
        fault = self._locate_quietly(source)
        if fault is not None:
            raise RuleValidationError(
                f"DRL syntax error at line {fault.line_number}: {fault.error_message}\n"
                f"Faulty content: {fault.faulty_content}\n"
                f"Verifier result: {verifier_result}",
                fault,
            )
        logger.warning("Fault finder could not isolate a line, using verifier result only")
        raise RuleValidationError(f"Validation failed: {verifier_result}")

    def _locate_quietly(self, source: str) -> FaultLocation | None:
        try:
            fault = self._finder.find_faulty_line(source)
        except InvalidSourceError:
            return None
        if fault is not None:
            logger.info(
                "Fault finder located fault at line %d: %s", fault.line_number, fault.error_message
            )
        return fault
