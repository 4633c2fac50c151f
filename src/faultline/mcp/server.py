"""FastMCP server exposing Faultline's fault locator as MCP tools.

Run via::

    faultline-mcp                       # reads .env (default: stdio)
    MCP_TRANSPORT=http faultline-mcp    # streamable HTTP on port 9000
    MCP_TRANSPORT=sse  faultline-mcp    # legacy SSE on port 9000

The oracle used to judge DRL text is chosen by the ``ORACLE`` setting.
Settings are loaded from environment variables and ``.env`` file; see
``.env.example`` for available options.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from faultline import __version__
from faultline.locator.completer import UnsupportedCompleterError, available_completers
from faultline.oracle import OracleError, OracleRegistry, UnsupportedOracleError
from faultline.service.validation import RuleValidationError, ValidationService
from faultline.settings import Settings

# ---------------------------------------------------------------------------
# Server + shared state
# ---------------------------------------------------------------------------

logger = logging.getLogger("faultline.mcp")

mcp = FastMCP("Faultline")
_service: ValidationService | None = None


def _require_service() -> ValidationService:
    if _service is None:
        raise ToolError("Validation service not initialised")
    return _service


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool
def locate_fault(source: str, completer: str | None = None) -> str:
    """Find the line that makes a Drools DRL file fail to compile.

    Binary-searches over line prefixes, asking the configured verifier about
    each one, and reports the earliest line whose inclusion breaks the file
    together with the verifier's message.

    Args:
        source: Complete DRL source text.
        completer: Prefix completion strategy, ``structural`` (default) or
            ``naive``.
    """
    logger.info("locate_fault called (source length=%d)", len(source))
    logger.debug("locate_fault source:\n%s", source)
    service = _require_service()
    try:
        fault = service.locate(source, completer=completer)
    except (ValueError, UnsupportedCompleterError) as exc:
        raise ToolError(str(exc)) from exc
    if fault is None:
        return "No fault found.  The DRL source validates."
    return (
        f"Fault at line {fault.line_number}.\n"
        f"  content: {fault.faulty_content}\n"
        f"  error:   {fault.error_message}"
    )


@mcp.tool
def validate_rules(source: str) -> str:
    """Validate DRL source and pinpoint the faulty line if it is rejected.

    Args:
        source: Complete DRL source text.
    """
    logger.info("validate_rules called (source length=%d)", len(source))
    service = _require_service()
    try:
        return service.validate_structure(source)
    except RuleValidationError as exc:
        raise ToolError(str(exc)) from exc


@mcp.tool
def list_oracles() -> str:
    """List available verifier oracles and prefix completion strategies."""
    service = _require_service()
    lines = ["Oracles:"]
    for name in OracleRegistry.available():
        marker = "  (active)" if name == service.oracle.name else ""
        lines.append(f"  - {name}{marker}")
    lines.append("Completers:")
    lines.extend(f"  - {name}" for name in available_completers())
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


@mcp.prompt
def debug_rule_file() -> str:
    """Guide for fixing a DRL file that fails to compile."""
    return """\
You are fixing a Drools DRL file that the rule compiler rejects.

1. Call `validate_rules(source)`.  If it returns "Code looks good", stop.
2. Otherwise call `locate_fault(source)`.  It reports the first line whose
   inclusion makes the file invalid, plus the compiler message.
3. Fix that line only.  Typical causes:
   - unbalanced parentheses in a pattern, e.g. `Person(age > 18`
   - a rule, query or declare block missing its `end`
   - a declared field not of the form `name : Type`
   - a malformed `package` header (it must come first)
4. Re-run `locate_fault` on the edited source; repeat until no fault is found.

Faults are reported one at a time.  A later line can still be broken after
the first fix.
"""


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the MCP server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "Faultline MCP Server v%s starting (transport=%s, oracle=%s)",
        __version__,
        settings.mcp_transport,
        settings.oracle,
    )

    global _service  # noqa: PLW0603
    try:
        _service = ValidationService.from_settings(settings)
    except (UnsupportedOracleError, UnsupportedCompleterError, OracleError) as exc:
        raise SystemExit(f"Cannot start: {exc}") from exc

    try:
        if settings.mcp_transport == "stdio":
            mcp.run(transport="stdio")
        else:
            mcp.run(
                transport=settings.mcp_transport,
                host=settings.mcp_server_host,
                port=settings.mcp_server_port,
                log_level=settings.log_level.lower(),
            )
    finally:
        _service.close()


if __name__ == "__main__":
    main()
