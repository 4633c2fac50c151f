"""Abstract validity oracle and the fail-closed adapter the locator talks to."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import StrEnum

logger = logging.getLogger("faultline.oracle")

UNKNOWN_ERROR = "Unknown compilation error"


class OracleError(Exception):
    """Raised by an oracle that could not reach a verdict."""


class Oracle(ABC):
    """A compiler or verifier that judges a DRL text blob.

    Subclasses implement :meth:`errors`; the other methods derive from it
    but may be overridden when the backend offers a cheaper check.
    """

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def errors(self, source: str) -> list[str]:
        """Return every error message for *source* (empty when valid)."""

    def is_valid(self, source: str) -> bool:
        return not self.errors(source)

    def first_error(self, source: str) -> str | None:
        errors = self.errors(source)
        return errors[0] if errors else None

    def close(self) -> None:
        """Release connections or other resources held by the oracle."""


class Verdict(StrEnum):
    VALID = "valid"
    INVALID = "invalid"
    ORACLE_CRASHED = "oracle_crashed"


class OracleAdapter:
    """Wraps an :class:`Oracle` so that its failures become data.

    A crashing oracle is treated as having rejected the text, and message
    retrieval never returns ``None``.
    """

    def __init__(self, oracle: Oracle) -> None:
        self._oracle = oracle

    @property
    def oracle(self) -> Oracle:
        return self._oracle

    def verdict(self, source: str) -> Verdict:
        try:
            valid = self._oracle.is_valid(source)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Oracle '%s' crashed during validity check: %s", self._oracle.name, exc)
            return Verdict.ORACLE_CRASHED
        return Verdict.VALID if valid else Verdict.INVALID

    def is_valid(self, source: str) -> bool:
        return self.verdict(source) is Verdict.VALID

    def first_error(self, source: str) -> str:
        try:
            message = self._oracle.first_error(source)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Oracle '%s' crashed while reporting errors: %s", self._oracle.name, exc)
            return str(exc) or UNKNOWN_ERROR
        return message or UNKNOWN_ERROR
