"""Block-structure tracking over a prefix of DRL source lines.

The tracker keeps an explicit stack of open regions so that a block opened
inside another one (a function written inside a rule consequence, say) is
closed before its parent when the prefix gets completed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum


class RegionKind(StrEnum):
    RULE = "rule"
    QUERY = "query"
    FUNCTION = "function"
    DECLARE = "declare"


@dataclass
class RuleRegion:
    has_when: bool = False
    has_then: bool = False
    brace_depth: int = 0  # open blocks in the consequence
    kind: RegionKind = field(default=RegionKind.RULE, init=False)

    def closing_tokens(self) -> list[str]:
        tokens = []
        if not self.has_when:
            tokens.append("when")
        if not self.has_then:
            tokens.append("then")
        tokens.extend(["}"] * max(self.brace_depth, 0))
        tokens.append("end")
        return tokens


@dataclass
class QueryRegion:
    kind: RegionKind = field(default=RegionKind.QUERY, init=False)

    def closing_tokens(self) -> list[str]:
        return ["end"]


@dataclass
class FunctionRegion:
    brace_depth: int = 0
    body_opened: bool = False
    kind: RegionKind = field(default=RegionKind.FUNCTION, init=False)

    def closing_tokens(self) -> list[str]:
        if not self.body_opened:
            return ["{ }"]
        return ["}"] * max(self.brace_depth, 0)


@dataclass
class DeclareRegion:
    kind: RegionKind = field(default=RegionKind.DECLARE, init=False)

    def closing_tokens(self) -> list[str]:
        return ["end"]


Region = RuleRegion | QueryRegion | FunctionRegion | DeclareRegion

_OPENERS: dict[str, type[RuleRegion | QueryRegion | FunctionRegion | DeclareRegion]] = {
    "rule ": RuleRegion,
    "query ": QueryRegion,
    "function ": FunctionRegion,
    "declare ": DeclareRegion,
}


@dataclass
class RegionState:
    """Open regions after scanning a prefix, innermost last."""

    stack: list[Region] = field(default_factory=list)

    @property
    def innermost(self) -> Region | None:
        return self.stack[-1] if self.stack else None

    @property
    def is_closed(self) -> bool:
        return not self.stack

    def _find(self, kind: RegionKind) -> Region | None:
        for region in reversed(self.stack):
            if region.kind is kind:
                return region
        return None

    # Flag view of the innermost region of each kind.

    @property
    def in_rule(self) -> bool:
        return self._find(RegionKind.RULE) is not None

    @property
    def in_query(self) -> bool:
        return self._find(RegionKind.QUERY) is not None

    @property
    def in_function(self) -> bool:
        return self._find(RegionKind.FUNCTION) is not None

    @property
    def in_declare(self) -> bool:
        return self._find(RegionKind.DECLARE) is not None

    @property
    def has_when_clause(self) -> bool:
        rule = self._find(RegionKind.RULE)
        return isinstance(rule, RuleRegion) and rule.has_when

    @property
    def has_then_clause(self) -> bool:
        rule = self._find(RegionKind.RULE)
        return isinstance(rule, RuleRegion) and rule.has_then

    @property
    def brace_depth(self) -> int:
        function = self._find(RegionKind.FUNCTION)
        return function.brace_depth if isinstance(function, FunctionRegion) else 0

    def closing_suffix(self) -> list[str]:
        """Tokens that close every open region, innermost first."""
        suffix: list[str] = []
        for region in reversed(self.stack):
            suffix.extend(region.closing_tokens())
        return suffix


class BlockTracker:
    """Classifies lines into nested DRL regions."""

    def scan(self, lines: Iterable[str]) -> RegionState:
        state = RegionState()
        for line in lines:
            self.feed(state, line)
        return state

    def feed(self, state: RegionState, line: str) -> None:
        """Update *state* with one more source line."""
        key = line.strip().lower()
        top = state.innermost

        # Function bodies are opaque: only braces matter until they balance.
        if isinstance(top, FunctionRegion):
            self._count_braces(state, top, line)
            return

        for prefix, region_type in _OPENERS.items():
            if key.startswith(prefix):
                region = region_type()
                state.stack.append(region)
                if isinstance(region, FunctionRegion):
                    self._count_braces(state, region, line)
                return

        if isinstance(top, RuleRegion):
            if key == "when":
                top.has_when = True
            elif key == "then":
                top.has_then = True
            elif key == "end":
                state.stack.pop()
            elif top.has_then:
                top.brace_depth += line.count("{") - line.count("}")
        elif isinstance(top, (QueryRegion, DeclareRegion)) and key == "end":
            state.stack.pop()

    @staticmethod
    def _count_braces(state: RegionState, region: FunctionRegion, line: str) -> None:
        opens = line.count("{")
        closes = line.count("}")
        region.brace_depth += opens - closes
        if opens:
            region.body_opened = True
        if region.brace_depth <= 0 and (opens or closes):
            state.stack.pop()
