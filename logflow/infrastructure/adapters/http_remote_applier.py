"""HTTP remote applier for the management logger API.

Posts log level changes to the backend, trying a short list of candidate
endpoints in order:

1. ``{endpoint}/{serviceId}`` with ``{"configuredLevel": ...}`` when the
   endpoint is a Spring actuator path
2. The configured endpoint with ``{"serviceId", "configuredLevel", "duration"}``
3. The standard ``/lightTracer/v1/managementLoggers`` path on the same host

A 2xx response from any candidate is success. A 403, any other non-2xx
response or a network error moves on to the next candidate; when all
candidates fail the call returns False. Nothing is raised to the caller.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

import httpx
from structlog import get_logger

from logflow.application.ports.remote_applier import RemoteApplierPort
from logflow.domain.errors.remote import RemoteApplyError
from logflow.domain.models.log_level import LogLevel

logger = get_logger()

STANDARD_LOGGERS_PATH = "/lightTracer/v1/managementLoggers"

_DOUBLE_SLASH = re.compile(r"([^:]/)/+")


@dataclass(frozen=True)
class _Candidate:
    url: str
    payload: dict[str, Any]


def _normalize(url: str) -> str:
    return _DOUBLE_SLASH.sub(r"\1", url)


def _base_url(endpoint: str) -> str:
    parts = urlsplit(endpoint)
    if not parts.scheme or not parts.netloc:
        return endpoint
    return f"{parts.scheme}://{parts.netloc}"


class HttpRemoteApplier(RemoteApplierPort):
    """Management logger API client.

    Attributes:
        _endpoint: Configured logger endpoint URL.
        _token: Bearer token sent with every request.
        _timeout: Per-request timeout in seconds.
        _client: Reused HTTP client, created lazily.
    """

    def __init__(
        self,
        endpoint: str,
        token: str,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not endpoint or not endpoint.strip():
            raise ValueError("Configuration Error: API endpoint URL is missing")
        self._endpoint = endpoint.strip()
        self._token = token
        self._timeout = timeout_seconds
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the reusable HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-api-logger": "all",
            "X-Requested-With": "XMLHttpRequest",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def candidates(self, service_id: str, payload: dict[str, Any]) -> list[_Candidate]:
        """Endpoints to try for ``service_id``, in order, without duplicates."""
        standard = _normalize(f"{_base_url(self._endpoint)}{STANDARD_LOGGERS_PATH}")
        ordered = [
            _Candidate(self._endpoint, payload),
            _Candidate(standard, payload),
        ]
        if "actuator" in self._endpoint:
            ordered.insert(
                0,
                _Candidate(
                    f"{self._endpoint.rstrip('/')}/{service_id}",
                    {"configuredLevel": payload["configuredLevel"]},
                ),
            )

        seen: set[str] = set()
        unique: list[_Candidate] = []
        for candidate in ordered:
            if candidate.url not in seen:
                seen.add(candidate.url)
                unique.append(candidate)
        return unique

    async def apply(self, service_id: str, level: LogLevel, duration_ms: int) -> bool:
        payload = {
            "serviceId": service_id,
            "configuredLevel": level.value,
            "duration": duration_ms,
        }
        return await self._post_first(service_id, payload, operation="apply")

    async def revert(self, service_id: str, default_level: LogLevel) -> bool:
        payload = {"serviceId": service_id, "configuredLevel": default_level.value}
        return await self._post_first(service_id, payload, operation="revert")

    async def _post_first(
        self, service_id: str, payload: dict[str, Any], *, operation: str
    ) -> bool:
        log = logger.bind(operation=operation, service_id=service_id)
        client = await self._get_client()

        for candidate in self.candidates(service_id, payload):
            try:
                await self._post(client, candidate)
            except RemoteApplyError as e:
                if e.status_code == 403:
                    log.warning("level_update_forbidden", url=candidate.url)
                else:
                    log.warning("level_update_candidate_failed", url=candidate.url, error=str(e))
                continue
            log.info("level_update_succeeded", url=candidate.url)
            return True

        log.error("level_update_failed_all_candidates")
        return False

    async def _post(self, client: httpx.AsyncClient, candidate: _Candidate) -> None:
        try:
            response = await client.post(
                candidate.url,
                json=candidate.payload,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise RemoteApplyError(candidate.url, message=f"{type(e).__name__}: {e}") from e
        if not response.is_success:
            raise RemoteApplyError(candidate.url, status_code=response.status_code)
