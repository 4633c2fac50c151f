"""Oracle that shells out to an external compiler or verifier command."""

from __future__ import annotations

import shlex
import subprocess

from faultline.oracle.base import Oracle, OracleError
from faultline.oracle.registry import OracleRegistry


@OracleRegistry.register("command")
class CommandOracle(Oracle):
    """Runs *command* with the DRL text on stdin.

    Exit status 0 means valid; otherwise every non-blank line the command
    printed (stderr first, then stdout) is an error message.
    """

    def __init__(self, command: str | list[str] | None = None, timeout: float = 30.0) -> None:
        if not command:
            raise OracleError("Command oracle requires a command (set ORACLE_COMMAND)")
        self._argv = shlex.split(command) if isinstance(command, str) else list(command)
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "command"

    def _run(self, source: str) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(
                self._argv,
                input=source,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise OracleError(f"Verifier command timed out after {self._timeout}s") from exc
        except OSError as exc:
            raise OracleError(f"Cannot run verifier command {self._argv[0]!r}: {exc}") from exc

    def errors(self, source: str) -> list[str]:
        proc = self._run(source)
        if proc.returncode == 0:
            return []
        output = f"{proc.stderr}\n{proc.stdout}"
        messages = [line.strip() for line in output.splitlines() if line.strip()]
        return messages or [""]

    def is_valid(self, source: str) -> bool:
        return self._run(source).returncode == 0
