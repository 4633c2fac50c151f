"""Tests for the bisection driver."""

from __future__ import annotations

import math

import pytest

from faultline.locator.bisect import FaultFinder, InvalidSourceError, find_faulty_line, split_lines
from faultline.locator.completer import NaivePrefixCompleter
from faultline.oracle.base import UNKNOWN_ERROR
from faultline.oracle.lexical import LexicalOracle
from tests.conftest import UNCLOSED_PATTERN_DRL, CrashingOracle, SilentOracle, StubOracle


class TestSplitLines:
    def test_trailing_newlines_dropped(self) -> None:
        assert split_lines("a\nb\n\n") == ("a", "b")

    def test_inner_blank_lines_kept(self) -> None:
        assert split_lines("\na\n\nb") == ("", "a", "", "b")

    def test_whitespace_tail_kept(self) -> None:
        assert split_lines("a\n  ") == ("a", "  ")


class TestEntryContract:
    @pytest.mark.parametrize("source", ["", "   ", "\n\n", " \t\n ", None])
    def test_blank_input_rejected(self, stub_oracle: StubOracle, source: str | None) -> None:
        with pytest.raises(InvalidSourceError, match="cannot be null or empty"):
            FaultFinder(stub_oracle).find_faulty_line(source)
        assert stub_oracle.calls == []

    def test_invalid_source_error_is_value_error(self) -> None:
        assert issubclass(InvalidSourceError, ValueError)

    def test_valid_source_returns_none_after_one_check(self, stub_oracle: StubOracle) -> None:
        result = FaultFinder(stub_oracle).find_faulty_line("one\ntwo\nthree\nfour")
        assert result is None
        assert stub_oracle.calls == ["one\ntwo\nthree\nfour"]


class TestLocating:
    def test_single_line(self, stub_oracle: StubOracle) -> None:
        fault = FaultFinder(stub_oracle).find_faulty_line("   BAD stuff here  ")
        assert fault is not None
        assert fault.line_number == 1
        assert fault.faulty_content == "BAD stuff here"
        assert fault.error_message == "syntax error near 'BAD' at line 1"

    def test_fault_in_middle(self, stub_oracle: StubOracle) -> None:
        source = "one\ntwo\n  BAD three\nfour\nfive"
        fault = FaultFinder(stub_oracle).find_faulty_line(source)
        assert fault is not None
        assert fault.line_number == 3
        assert fault.faulty_content == "BAD three"
        assert fault.error_message == "syntax error near 'BAD' at line 3"

    def test_fault_on_last_line(self, stub_oracle: StubOracle) -> None:
        fault = FaultFinder(stub_oracle).find_faulty_line("a\nb\nc\nd\nBAD }")
        assert fault is not None
        assert fault.line_number == 5
        assert fault.faulty_content == "BAD }"

    def test_fault_on_first_line(self, stub_oracle: StubOracle) -> None:
        fault = FaultFinder(stub_oracle).find_faulty_line("BAD\nb\nc\nd")
        assert fault is not None
        assert fault.line_number == 1

    def test_earliest_of_several_faults(self, stub_oracle: StubOracle) -> None:
        fault = FaultFinder(stub_oracle).find_faulty_line("a\nb\nBAD\nc\nBAD\nd")
        assert fault is not None
        assert fault.line_number == 3

    def test_trailing_newline_does_not_add_a_line(self, stub_oracle: StubOracle) -> None:
        fault = FaultFinder(stub_oracle).find_faulty_line("a\nBAD\n")
        assert fault is not None
        assert fault.line_number == 2

    def test_blank_prefixes_skip_the_oracle(self, stub_oracle: StubOracle) -> None:
        fault = FaultFinder(stub_oracle).find_faulty_line("\n\nBAD")
        assert fault is not None
        assert fault.line_number == 3
        # whole-document check + message for the terminal prefix
        assert len(stub_oracle.calls) == 2

    @pytest.mark.parametrize("bad_index", range(37))
    def test_every_position_found(self, bad_index: int) -> None:
        lines = [f"line {i}" for i in range(37)]
        lines[bad_index] = "BAD"
        oracle = StubOracle()
        fault = FaultFinder(oracle).find_faulty_line("\n".join(lines))
        assert fault is not None
        assert fault.line_number == bad_index + 1

    @pytest.mark.parametrize("n", [2, 3, 8, 100, 1000])
    def test_oracle_calls_are_logarithmic(self, n: int) -> None:
        lines = [f"line {i}" for i in range(n)]
        lines[n // 3] = "BAD"
        oracle = StubOracle()
        FaultFinder(oracle).find_faulty_line("\n".join(lines))
        # whole-document check, bisection verdicts, terminal message
        assert len(oracle.calls) <= 1 + math.ceil(math.log2(n)) + 1

    def test_idempotent(self, stub_oracle: StubOracle) -> None:
        finder = FaultFinder(stub_oracle)
        source = "alpha\nbeta\ngamma BAD\ndelta"
        assert finder.find_faulty_line(source) == finder.find_faulty_line(source)


class TestOracleFailures:
    def test_crashing_oracle_fails_closed(self) -> None:
        fault = FaultFinder(CrashingOracle()).find_faulty_line("x\ny\nz")
        assert fault is not None
        assert fault.line_number == 1
        assert fault.error_message == "verifier exploded"

    def test_crash_on_specific_content_counts_as_invalid(self) -> None:
        oracle = CrashingOracle(trigger="BOOM", error="parser hit BOOM")
        fault = FaultFinder(oracle).find_faulty_line("fine\nBOOM\nfine")
        assert fault is not None
        assert fault.line_number == 2
        assert fault.error_message == "parser hit BOOM"

    def test_crash_without_message_uses_fallback(self) -> None:
        fault = FaultFinder(CrashingOracle(error="")).find_faulty_line("x\ny")
        assert fault is not None
        assert fault.error_message == UNKNOWN_ERROR

    def test_rejection_without_message_uses_fallback(self) -> None:
        fault = FaultFinder(SilentOracle()).find_faulty_line("ok\nBAD")
        assert fault is not None
        assert fault.line_number == 2
        assert fault.error_message == "Unknown compilation error"


class TestCompletionStrategy:
    def test_structural_finds_the_unclosed_pattern(self, lexical_oracle: LexicalOracle) -> None:
        fault = FaultFinder(lexical_oracle).find_faulty_line(UNCLOSED_PATTERN_DRL)
        assert fault is not None
        assert fault.line_number == 5
        assert fault.faulty_content == "$p : Person(age > 18"
        assert "Unclosed '('" in fault.error_message

    def test_naive_blames_the_truncated_rule_header(self, lexical_oracle: LexicalOracle) -> None:
        finder = FaultFinder(lexical_oracle, NaivePrefixCompleter())
        fault = finder.find_faulty_line(UNCLOSED_PATTERN_DRL)
        assert fault is not None
        assert fault.line_number == 3

    def test_helper_selects_completer_by_name(self, lexical_oracle: LexicalOracle) -> None:
        structural = find_faulty_line(UNCLOSED_PATTERN_DRL, lexical_oracle)
        naive = find_faulty_line(UNCLOSED_PATTERN_DRL, lexical_oracle, completer="naive")
        assert structural is not None and structural.line_number == 5
        assert naive is not None and naive.line_number == 3
