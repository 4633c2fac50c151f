"""Unit tests for MCP server tools: direct function calls, no transport.

FastMCP's ``@mcp.tool`` wraps functions in ``FunctionTool`` objects.  We call
the underlying function via ``.fn`` to test the business logic directly.
"""

from __future__ import annotations

import pytest
from fastmcp.exceptions import ToolError

import faultline.mcp.server as mcp_mod
from faultline.mcp.server import debug_rule_file, list_oracles, locate_fault, validate_rules
from faultline.oracle.lexical import LexicalOracle
from faultline.service.validation import ValidationService
from tests.conftest import UNCLOSED_PATTERN_DRL, VALID_DRL

_locate_fault = locate_fault.fn
_validate_rules = validate_rules.fn
_list_oracles = list_oracles.fn
_debug_rule_file = debug_rule_file.fn


@pytest.fixture(autouse=True)
def _fresh_service() -> None:
    mcp_mod._service = ValidationService(LexicalOracle())


class TestLocateFault:
    def test_no_fault(self) -> None:
        assert _locate_fault(VALID_DRL) == "No fault found.  The DRL source validates."

    def test_fault(self) -> None:
        result = _locate_fault(UNCLOSED_PATTERN_DRL)
        assert result.startswith("Fault at line 5.\n")
        assert "  content: $p : Person(age > 18\n" in result
        assert "  error:   [line 5:16] Unclosed '('" in result

    def test_naive_completer(self) -> None:
        assert _locate_fault(UNCLOSED_PATTERN_DRL, completer="naive").startswith("Fault at line 3.")

    def test_blank_source(self) -> None:
        with pytest.raises(ToolError, match="cannot be null or empty"):
            _locate_fault("   ")

    def test_unknown_completer(self) -> None:
        with pytest.raises(ToolError, match="Unsupported completer 'clever'"):
            _locate_fault(VALID_DRL, completer="clever")

    def test_service_not_initialised(self) -> None:
        mcp_mod._service = None
        with pytest.raises(ToolError, match="not initialised"):
            _locate_fault(VALID_DRL)


class TestValidateRules:
    def test_valid(self) -> None:
        assert _validate_rules(VALID_DRL) == "Code looks good"

    def test_invalid(self) -> None:
        with pytest.raises(ToolError, match="DRL syntax error at line 5"):
            _validate_rules(UNCLOSED_PATTERN_DRL)

    def test_blank(self) -> None:
        with pytest.raises(ToolError, match="DRL code cannot be null or empty"):
            _validate_rules("")


class TestListOracles:
    def test_lists_oracles_and_completers(self) -> None:
        result = _list_oracles()
        assert result.startswith("Oracles:\n")
        assert "  - lexical  (active)" in result
        assert "  - http\n" in result
        assert "Completers:\n  - naive\n  - structural" in result


class TestPrompts:
    def test_debug_rule_file_mentions_tools(self) -> None:
        text = _debug_rule_file()
        assert "validate_rules" in text
        assert "locate_fault" in text
