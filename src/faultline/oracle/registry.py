"""Oracle plugin registry: discover and register oracle implementations."""

from __future__ import annotations

from typing import Any

from faultline.oracle.base import Oracle


class UnsupportedOracleError(Exception):
    """Raised when a requested oracle is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.oracle_name = name
        self.available = available
        super().__init__(f"Unsupported oracle '{name}'. Available: {', '.join(available)}")


class OracleRegistry:
    """Registry for validity oracle plugins."""

    _oracles: dict[str, type[Oracle]] = {}

    @classmethod
    def register(cls, name: str):  # noqa: ANN206
        """Register an oracle class under *name*. Used as a decorator."""

        def _decorator(oracle_class: type[Oracle]) -> type[Oracle]:
            cls._oracles[name] = oracle_class
            return oracle_class

        return _decorator

    @classmethod
    def get(cls, name: str, **options: Any) -> Oracle:
        """Build an instance of the named oracle, passing *options* to it."""
        if name not in cls._oracles:
            raise UnsupportedOracleError(name, available=cls.available())
        return cls._oracles[name](**options)

    @classmethod
    def available(cls) -> list[str]:
        """List registered oracle names."""
        return sorted(cls._oracles.keys())
