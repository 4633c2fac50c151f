"""Oracle backed by a remote verifier service.

The service receives ``POST {"source": "<drl>"}`` and answers with
``{"valid": bool, "errors": ["...", ...]}``.
"""

from __future__ import annotations

import httpx

from faultline.models.errors import OracleReport
from faultline.oracle.base import Oracle, OracleError
from faultline.oracle.registry import OracleRegistry


@OracleRegistry.register("http")
class HttpOracle(Oracle):
    """Asks a verifier over HTTP.  One request per judgement, no retries."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not url:
            raise OracleError("HTTP oracle requires a verifier URL (set ORACLE_URL)")
        self._url = url
        self._client = client or httpx.Client(timeout=timeout)

    @property
    def name(self) -> str:
        return "http"

    def report(self, source: str) -> OracleReport:
        try:
            response = self._client.post(self._url, json={"source": source})
            response.raise_for_status()
            return OracleReport.model_validate(response.json())
        except httpx.HTTPError as exc:
            raise OracleError(f"Verifier request to {self._url} failed: {exc}") from exc
        except ValueError as exc:
            raise OracleError(f"Verifier at {self._url} returned a malformed response: {exc}") from exc

    def errors(self, source: str) -> list[str]:
        result = self.report(source)
        if result.valid:
            return []
        return result.errors or [""]

    def is_valid(self, source: str) -> bool:
        return self.report(source).valid

    def close(self) -> None:
        self._client.close()
