"""Binary search for the line that turns a DRL document invalid."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from faultline.locator.completer import PrefixCompleter, StructuralPrefixCompleter, get_completer
from faultline.models.fault import FaultLocation
from faultline.oracle.base import Oracle, OracleAdapter

logger = logging.getLogger("faultline.locator")


class InvalidSourceError(ValueError):
    """Raised when there is no source text to search."""


def split_lines(source: str) -> tuple[str, ...]:
    """Split on newlines, dropping the empty tail left by trailing newlines."""
    lines = source.split("\n")
    while lines and lines[-1] == "":
        lines.pop()
    return tuple(lines)


class FaultFinder:
    """Locates the earliest line whose inclusion makes the oracle reject a prefix.

    Each candidate prefix ``lines[0..k]`` is completed by the configured
    :class:`PrefixCompleter` and judged by the oracle.  Oracle failures are
    absorbed by :class:`OracleAdapter`, so apart from rejecting blank input
    this never raises.

    Instances hold no per-call state and may be shared between threads as
    long as the oracle allows concurrent use.
    """

    def __init__(self, oracle: Oracle, completer: PrefixCompleter | None = None) -> None:
        self._oracle = OracleAdapter(oracle)
        self._completer = completer or StructuralPrefixCompleter()

    @property
    def completer(self) -> PrefixCompleter:
        return self._completer

    def find_faulty_line(self, source: str | None) -> FaultLocation | None:
        """Return the fault location, or ``None`` when *source* already validates."""
        if source is None or not source.strip():
            raise InvalidSourceError("DRL content cannot be null or empty")

        if self._oracle.is_valid(source):
            logger.debug("Source validates as a whole; nothing to locate")
            return None

        lines = split_lines(source)
        fault = self._bisect(lines)
        logger.info("Located fault at line %d: %s", fault.line_number, fault.error_message)
        return fault

    def _bisect(self, lines: Sequence[str]) -> FaultLocation:
        start, end = 0, len(lines) - 1
        while start < end:
            mid = start + (end - start) // 2
            if self._prefix_is_valid(lines, mid):
                logger.debug("Lines 1..%d valid, searching %d..%d", mid + 1, mid + 2, end + 1)
                start = mid + 1
            else:
                logger.debug("Lines 1..%d invalid, searching %d..%d", mid + 1, start + 1, mid + 1)
                end = mid
        return self._report(lines, end)

    def _prefix_is_valid(self, lines: Sequence[str], end: int) -> bool:
        document = self._completer.complete(lines, end)
        if not document.strip():
            return True
        return self._oracle.is_valid(document)

    def _report(self, lines: Sequence[str], index: int) -> FaultLocation:
        document = self._completer.complete(lines, index)
        return FaultLocation(
            faulty_content=lines[index].strip(),
            line_number=index + 1,
            error_message=self._oracle.first_error(document),
        )


def find_faulty_line(
    source: str | None,
    oracle: Oracle,
    completer: str = "structural",
) -> FaultLocation | None:
    """One-shot helper: build a :class:`FaultFinder` and run it."""
    return FaultFinder(oracle, get_completer(completer)).find_faulty_line(source)
