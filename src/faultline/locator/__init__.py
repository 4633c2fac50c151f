"""Fault localization engine: block tracking, prefix completion, bisection."""

from faultline.locator.bisect import FaultFinder, InvalidSourceError, find_faulty_line, split_lines
from faultline.locator.completer import (
    NaivePrefixCompleter,
    PrefixCompleter,
    StructuralPrefixCompleter,
    UnsupportedCompleterError,
    get_completer,
)
from faultline.locator.tracker import BlockTracker, RegionKind, RegionState

__all__ = [
    "BlockTracker",
    "FaultFinder",
    "InvalidSourceError",
    "NaivePrefixCompleter",
    "PrefixCompleter",
    "RegionKind",
    "RegionState",
    "StructuralPrefixCompleter",
    "UnsupportedCompleterError",
    "find_faulty_line",
    "get_completer",
    "split_lines",
]
