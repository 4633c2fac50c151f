"""Built-in lexical DRL checker.

This is not a DRL parser.  It catches the classes of mistake that make a
Drools build fail before any type checking happens:

* unbalanced ``()``, ``[]``, ``{}`` and unterminated string literals or
  block comments;
* a malformed or misplaced ``package`` header, malformed ``import`` and
  ``global`` statements;
* block keyword structure: ``rule``/``query``/``declare`` blocks closed by
  ``end``, ``when`` before ``then`` inside a rule, ``function`` bodies;
* declared fields of the form ``name : Type``.

Anything it cannot judge (rule conditions, consequence code) it accepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from faultline.models.errors import SourceSpan, SyntaxIssue
from faultline.oracle.base import Oracle
from faultline.oracle.registry import OracleRegistry

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {")": "(", "]": "[", "}": "{"}

_IDENT = r"[A-Za-z_$][\w$]*"
_QUALIFIED = rf"{_IDENT}(?:\.{_IDENT})*"
_TYPE = rf"{_QUALIFIED}(?:<[^>]*>)?(?:\[\])*"
_ANNOTATION = r"@\w+(?:\(.*\))?"

_WORD_RE = re.compile(_IDENT)
_PACKAGE_RE = re.compile(rf"^package\s+{_QUALIFIED}\s*;?$")
_IMPORT_RE = re.compile(rf"^import\s+(?:static\s+|function\s+)?{_QUALIFIED}(?:\.\*)?\s*;?$")
_GLOBAL_RE = re.compile(rf"^global\s+{_TYPE}\s+{_IDENT}\s*;?$")
_DIALECT_RE = re.compile(r'^dialect\s+(?:""|\'\')\s*;?$')
_NAMED_BLOCK_RE = re.compile(rf"^(?:rule|query)\s+(?:\"\"|''|{_IDENT})")
_DECLARE_RE = re.compile(
    rf"^declare\s+{_QUALIFIED}(?:\s+extends\s+{_QUALIFIED})?(?:\s+{_ANNOTATION})*$"
)
_FUNCTION_RE = re.compile(rf"^function\s+{_TYPE}\s+{_IDENT}\s*\(")
_FIELD_RE = re.compile(rf"^{_IDENT}\s*:\s*{_TYPE}(?:\s*{_ANNOTATION})*\s*;?$")
_ANNOTATION_RE = re.compile(rf"^{_ANNOTATION}$")

_BLOCK_OPENERS = ("rule", "query", "declare", "function")


def _issue(code: str, message: str, line: int, column: int = 1) -> SyntaxIssue:
    return SyntaxIssue(code=code, message=message, span=SourceSpan(line=line, column=column))


def _string_end(line: str, start: int) -> int:
    """Index of the quote closing the literal opened at *start*, or -1."""
    quote = line[start]
    i = start + 1
    while i < len(line):
        if line[i] == "\\":
            i += 2
            continue
        if line[i] == quote:
            return i
        i += 1
    return -1


def _scan(lines: list[str]) -> tuple[list[str], list[SyntaxIssue]]:
    """Check delimiters and return each line with comments and string bodies removed."""
    issues: list[SyntaxIssue] = []
    code_lines: list[str] = []
    stack: list[tuple[str, int, int]] = []
    balanced = True
    in_comment: tuple[int, int] | None = None

    for lineno, line in enumerate(lines, start=1):
        out: list[str] = []
        i = 0
        while i < len(line):
            if in_comment is not None:
                if line.startswith("*/", i):
                    in_comment = None
                    i += 2
                else:
                    i += 1
                continue
            if line.startswith("//", i):
                break
            if line.startswith("/*", i):
                in_comment = (lineno, i + 1)
                i += 2
                continue
            ch = line[i]
            if ch in "\"'":
                end = _string_end(line, i)
                if end < 0:
                    issues.append(
                        _issue("UNTERMINATED_STRING", "Unterminated string literal", lineno, i + 1)
                    )
                    break
                out.append(ch + ch)
                i = end + 1
                continue
            if balanced and ch in _OPENERS:
                stack.append((ch, lineno, i + 1))
            elif balanced and ch in _CLOSERS:
                if not stack or stack[-1][0] != _CLOSERS[ch]:
                    issues.append(_issue("UNEXPECTED_DELIMITER", f"Unexpected '{ch}'", lineno, i + 1))
                    balanced = False
                else:
                    stack.pop()
            out.append(ch)
            i += 1
        code_lines.append("".join(out))

    if in_comment is not None:
        issues.append(_issue("UNTERMINATED_COMMENT", "Unterminated block comment", *in_comment))
    if balanced:
        for opener, lineno, column in reversed(stack):
            issues.append(
                _issue(
                    "UNCLOSED_DELIMITER",
                    f"Unclosed '{opener}' (expected '{_OPENERS[opener]}' before end of input)",
                    lineno,
                    column,
                )
            )
    return code_lines, issues


@dataclass
class _Block:
    kind: str
    label: str
    line: int
    has_when: bool = False
    has_then: bool = False
    depth: int = 0
    opened: bool = False


class _StructureChecker:
    """Line-oriented keyword structure check over comment-free code lines."""

    def __init__(self, lines: list[str], code_lines: list[str]) -> None:
        self._lines = lines
        self._code_lines = code_lines
        self._issues: list[SyntaxIssue] = []
        self._block: _Block | None = None
        self._seen_statement = False

    def run(self) -> list[SyntaxIssue]:
        for lineno, code in enumerate(self._code_lines, start=1):
            text = code.strip()
            if text:
                self._visit(lineno, text)
        block = self._block
        if block is not None:
            if block.kind == "function":
                if not block.opened:
                    self._add("MISSING_BODY", f"Function '{block.label}' has no body", block.line)
            else:
                self._add("MISSING_END", f"Missing 'end' for {block.kind} '{block.label}'", block.line)
        return self._issues

    def _add(self, code: str, message: str, line: int) -> None:
        self._issues.append(_issue(code, message, line))

    def _label(self, lineno: int) -> str:
        raw = self._lines[lineno - 1].strip()
        parts = raw.split(None, 1)
        return parts[1].rstrip("{ ").strip().strip("\"'") if len(parts) > 1 else raw

    def _visit(self, lineno: int, text: str) -> None:
        block = self._block
        if block is None:
            self._top_level(lineno, text)
            return
        if block.kind == "function":
            self._count_braces(block, text)
            return

        key = text.lower()
        word = key.split()[0]
        if word in _BLOCK_OPENERS and key != word:
            self._add(
                "MISSING_END",
                f"Missing 'end' for {block.kind} '{block.label}' before '{word}'",
                lineno,
            )
            self._block = None
            self._top_level(lineno, text)
            return

        if key == "end":
            if block.kind == "rule" and not block.has_then:
                self._add("MISSING_THEN", f"Rule '{block.label}' has no 'then' section", lineno)
            self._block = None
        elif block.kind == "rule":
            self._rule_line(block, lineno, key)
        elif block.kind == "declare":
            if not (_FIELD_RE.match(text) or _ANNOTATION_RE.match(text)):
                self._add(
                    "INVALID_FIELD",
                    f"Invalid field declaration '{self._lines[lineno - 1].strip()}' "
                    f"in type '{block.label}'",
                    lineno,
                )

    def _rule_line(self, block: _Block, lineno: int, key: str) -> None:
        if key == "when":
            if block.has_then:
                self._add("MISPLACED_WHEN", "'when' after 'then'", lineno)
            elif block.has_when:
                self._add("DUPLICATE_WHEN", "Duplicate 'when'", lineno)
            block.has_when = True
        elif key == "then":
            if block.has_then:
                self._add("DUPLICATE_THEN", "Duplicate 'then'", lineno)
            block.has_then = True

    def _count_braces(self, block: _Block, text: str) -> None:
        block.depth += text.count("{") - text.count("}")
        if "{" in text:
            block.opened = True
        if block.opened and block.depth <= 0:
            self._block = None

    def _top_level(self, lineno: int, text: str) -> None:
        match = _WORD_RE.match(text)
        word = match.group().lower() if match else ""
        raw = self._lines[lineno - 1].strip()

        if word == "package":
            if self._seen_statement:
                self._add("MISPLACED_PACKAGE", "Package declaration must come first", lineno)
            elif not _PACKAGE_RE.match(text):
                self._add("INVALID_PACKAGE", f"Malformed package declaration '{raw}'", lineno)
        elif word == "import":
            if not _IMPORT_RE.match(text):
                self._add("INVALID_IMPORT", f"Malformed import '{raw}'", lineno)
        elif word == "global":
            if not _GLOBAL_RE.match(text):
                self._add("INVALID_GLOBAL", f"Malformed global '{raw}'", lineno)
        elif word == "dialect":
            if not _DIALECT_RE.match(text):
                self._add("INVALID_DIALECT", f"Malformed dialect '{raw}'", lineno)
        elif word in ("rule", "query"):
            if not _NAMED_BLOCK_RE.match(text):
                self._add("MISSING_NAME", f"{word.title()} declaration without a name", lineno)
            self._block = _Block(kind=word, label=self._label(lineno), line=lineno)
        elif word == "declare":
            if not _DECLARE_RE.match(text):
                self._add("INVALID_DECLARE", f"Malformed type declaration '{raw}'", lineno)
            self._block = _Block(kind="declare", label=self._label(lineno), line=lineno)
        elif word == "function":
            if not _FUNCTION_RE.match(text):
                self._add("INVALID_FUNCTION", f"Malformed function signature '{raw}'", lineno)
            block = _Block(kind="function", label=self._label(lineno), line=lineno)
            self._block = block
            self._count_braces(block, text)
        elif text.lower() == "end":
            self._add("UNEXPECTED_END", "'end' without an open block", lineno)
        else:
            self._add("UNEXPECTED_INPUT", f"Unexpected input '{raw}'", lineno)
        self._seen_statement = True


@OracleRegistry.register("lexical")
class LexicalOracle(Oracle):
    """Dependency-free DRL checker for local use and tests."""

    @property
    def name(self) -> str:
        return "lexical"

    def check(self, source: str) -> list[SyntaxIssue]:
        """Return all issues, ordered by source position."""
        lines = source.split("\n")
        code_lines, issues = _scan(lines)
        issues.extend(_StructureChecker(lines, code_lines).run())
        return sorted(issues, key=lambda i: (i.span.line, i.span.column) if i.span else (0, 0))

    def errors(self, source: str) -> list[str]:
        return [issue.render() for issue in self.check(source)]
