"""Validity oracle plugin system for Faultline."""

# Import oracles to trigger registration
import faultline.oracle.command as _command  # noqa: F401
import faultline.oracle.http as _http  # noqa: F401
import faultline.oracle.lexical as _lexical  # noqa: F401
from faultline.oracle.base import Oracle, OracleAdapter, OracleError, Verdict
from faultline.oracle.registry import OracleRegistry, UnsupportedOracleError

__all__ = [
    "Oracle",
    "OracleAdapter",
    "OracleError",
    "OracleRegistry",
    "UnsupportedOracleError",
    "Verdict",
]
