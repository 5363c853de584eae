"""HTTP client for the remote AI gateway (scan, remediate, best practices)."""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from codeshield.config.loader import CodeShieldSettings
from codeshield.errors import GatewayError
from codeshield.models.results import (
    BestPracticesResult,
    GatewayBestPracticesResponse,
    GatewayRemediationResponse,
    RemediationSuggestion,
    ScanResult,
)

logger = structlog.get_logger()


class AIGateway:
    """Request/response calls to the AI gateway.

    Every failure mode (transport, timeout, HTTP status, body shape) is
    reported as GatewayError. No retries: callers decide what a failure means.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str = "",
        timeout: float = 60.0,
        scan_path: str = "/scan",
        remediation_path: str = "/remediate",
        best_practices_path: str = "/best-practices",
        max_connections: int = 20,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._paths = {
            "scan": scan_path,
            "remediate": remediation_path,
            "best_practices": best_practices_path,
        }
        headers = {"Accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=False,
            limits=httpx.Limits(max_connections=max_connections),
        )
        self._headers = headers

    @classmethod
    def from_settings(cls, settings: CodeShieldSettings) -> AIGateway:
        return cls(
            settings.gateway_url,
            api_key=settings.gateway_api_key,
            timeout=settings.gateway_timeout,
            scan_path=settings.gateway_scan_path,
            remediation_path=settings.gateway_remediation_path,
            best_practices_path=settings.gateway_best_practices_path,
            max_connections=settings.gateway_max_connections,
        )

    async def scan(self, language: str, code: str) -> ScanResult:
        data = await self._post("scan", {"language": language, "code": code})
        result = self._parse("scan", ScanResult, data)
        logger.info("gateway_scan_complete", language=language, finding_count=result.finding_count)
        return result

    async def remediate(
        self, code_snippet: str, vulnerability_description: str, language: str
    ) -> RemediationSuggestion:
        data = await self._post(
            "remediate",
            {
                "codeSnippet": code_snippet,
                "vulnerabilityDescription": vulnerability_description,
                "language": language,
            },
        )
        parsed = self._parse("remediate", GatewayRemediationResponse, data)
        return RemediationSuggestion(text=parsed.remediation_suggestions)

    async def best_practices(self, language: str) -> BestPracticesResult:
        data = await self._post("best_practices", {"language": language})
        parsed = self._parse("best_practices", GatewayBestPracticesResponse, data)
        return BestPracticesResult(language=language, html=parsed.best_practices)

    async def ping(self) -> bool:
        """Check if the gateway answers at all (any status below 500)."""
        try:
            resp = await self._client.head(f"{self.base_url}/", headers=self._headers, timeout=5.0)
            return resp.status_code < 500
        except httpx.HTTPError:
            return False

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, operation: str, payload: dict[str, Any]) -> Any:
        path = self._paths[operation]
        try:
            resp = await self._client.post(f"{self.base_url}{path}", json=payload, headers=self._headers)
        except httpx.TimeoutException as exc:
            logger.warning("gateway_timeout", operation=operation, error=type(exc).__name__)
            raise GatewayError(operation, "gateway timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("gateway_unreachable", operation=operation, error=str(exc))
            raise GatewayError(operation, "gateway unreachable") from exc

        if resp.status_code >= 400:
            logger.warning("gateway_error_status", operation=operation, status_code=resp.status_code)
            raise GatewayError(operation, f"gateway returned HTTP {resp.status_code}", resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("gateway_invalid_json", operation=operation, body_size=len(resp.content))
            raise GatewayError(operation, "gateway returned a non-JSON body", resp.status_code) from exc

    @staticmethod
    def _parse(operation: str, model: type[BaseModel], data: Any) -> Any:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            # Field locations only; the body may echo submitted code
            locations = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
            logger.warning("gateway_unexpected_shape", operation=operation, fields=locations)
            raise GatewayError(operation, "gateway response did not match the expected shape") from exc


_gateway: AIGateway | None = None


def init_gateway(settings: CodeShieldSettings) -> AIGateway:
    """Create the shared gateway client."""
    global _gateway
    _gateway = AIGateway.from_settings(settings)
    logger.info("gateway_client_ready", gateway_url=_gateway.base_url)
    return _gateway


def get_gateway() -> AIGateway:
    """Return the shared gateway client, creating it lazily from settings."""
    global _gateway
    if _gateway is None:
        from codeshield.config.loader import get_settings

        _gateway = AIGateway.from_settings(get_settings())
    return _gateway


async def close_gateway() -> None:
    """Close the shared gateway client."""
    global _gateway
    if _gateway is not None:
        await _gateway.aclose()
        _gateway = None
        logger.info("gateway_client_closed")
