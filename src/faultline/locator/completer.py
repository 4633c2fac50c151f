"""Prefix completion: turn a truncated line range into a judgeable document."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from faultline.locator.tracker import BlockTracker


class UnsupportedCompleterError(Exception):
    """Raised when a requested completer strategy does not exist."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.completer_name = name
        self.available = available
        super().__init__(f"Unsupported completer '{name}'. Available: {', '.join(available)}")


class PrefixCompleter(ABC):
    """Builds the candidate document for ``lines[0..end]``."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def complete(self, lines: Sequence[str], end: int) -> str:
        """Return the document for lines ``0`` through *end* inclusive."""


class NaivePrefixCompleter(PrefixCompleter):
    """Raw prefix concatenation, no closing tokens."""

    @property
    def name(self) -> str:
        return "naive"

    def complete(self, lines: Sequence[str], end: int) -> str:
        return "\n".join(lines[: end + 1])


class StructuralPrefixCompleter(PrefixCompleter):
    """Appends whatever closes the regions still open at *end*.

    Keeps the oracle from rejecting a prefix merely because it was cut in
    the middle of a rule, query, function or type declaration.
    """

    def __init__(self, tracker: BlockTracker | None = None) -> None:
        self._tracker = tracker or BlockTracker()

    @property
    def name(self) -> str:
        return "structural"

    def complete(self, lines: Sequence[str], end: int) -> str:
        prefix = list(lines[: end + 1])
        state = self._tracker.scan(prefix)
        return "\n".join(prefix + state.closing_suffix())


_COMPLETERS: dict[str, type[PrefixCompleter]] = {
    "structural": StructuralPrefixCompleter,
    "naive": NaivePrefixCompleter,
}


def available_completers() -> list[str]:
    return sorted(_COMPLETERS)


def get_completer(name: str) -> PrefixCompleter:
    """Instantiate the completer strategy registered under *name*."""
    if name not in _COMPLETERS:
        raise UnsupportedCompleterError(name, available=available_completers())
    return _COMPLETERS[name]()
