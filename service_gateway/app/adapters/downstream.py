"""
Generic downstream HTTP client for the Gateway.

One ``forward`` call is exactly one outbound POST: no retries, no caching.
Every failure is translated into a ``GatewayError`` subclass.
"""

import asyncio
import json
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx
from pydantic import BaseModel

from service_gateway.app.domain.correlation import CorrelationContext
from shared.errors import DownstreamRejected, DownstreamTimeout, TransportFailure
from shared.logging import get_logger
from shared.metrics import MetricsCollector

DEFAULT_TIMEOUT_SECONDS = 30.0

# Rejection bodies are echoed in error details, capped to this many characters
MAX_BODY_EXCERPT = 512


@dataclass(frozen=True)
class RawResponse:
    """Successful downstream reply, left for the caller to interpret."""

    status_code: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)

    def json(self) -> Optional[Any]:
        """Decoded JSON body, or ``None`` when the body is not JSON."""
        if not self.body:
            return None
        try:
            return json.loads(self.body)
        except ValueError:
            return None


def canonical_json(payload: Any) -> bytes:
    """Serialize a payload with sorted keys and compact separators."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True)
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class DownstreamClient:
    """Forwards serialized payloads to downstream services over a pooled client."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        limits: Optional[httpx.Limits] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.timeout = timeout
        self.limits = limits or httpx.Limits(max_connections=100, max_keepalive_connections=20)
        self.metrics = metrics
        self.logger = get_logger("gateway.downstream")
        self._http_client = http_client
        self._owns_client = http_client is None

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=self.limits,
            )
        return self._http_client

    async def aclose(self) -> None:
        """Close the pooled client if this instance created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def forward(
        self,
        target_url: str,
        payload: Any,
        correlation: CorrelationContext,
        timeout: Optional[float] = None,
        service: str = "downstream",
    ) -> RawResponse:
        """POST ``payload`` to ``target_url`` carrying the correlation headers."""
        bound = timeout if timeout is not None else self.timeout
        body = canonical_json(payload)
        headers = {"Content-Type": "application/json", **correlation.outbound_headers()}
        correlation_id = correlation.request_id
        client = self._get_http_client()
        start_time = time.monotonic()

        try:
            response = await asyncio.wait_for(
                client.post(target_url, content=body, headers=headers, timeout=bound),
                timeout=bound,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            self._record(service, "timeout", start_time)
            self.logger.warning(
                "Downstream call timed out",
                service=service,
                url=target_url,
                timeout_seconds=bound,
            )
            raise DownstreamTimeout(service, bound, request_id=correlation_id) from None
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            cause = _describe(exc)
            self._record(service, "transport_failure", start_time)
            self.logger.error(
                "Downstream call failed",
                service=service,
                url=target_url,
                error=cause,
            )
            raise TransportFailure(service, cause, request_id=correlation_id) from exc

        if not response.is_success:
            self._record(service, "rejected", start_time)
            self.logger.error(
                "Downstream call rejected",
                service=service,
                url=target_url,
                status_code=response.status_code,
            )
            raise DownstreamRejected(
                service,
                response.status_code,
                body=response.text[:MAX_BODY_EXCERPT],
                request_id=correlation_id,
            )

        self._record(service, "success", start_time)
        self.logger.info(
            "Downstream call succeeded",
            service=service,
            url=target_url,
            status_code=response.status_code,
        )
        return RawResponse(
            status_code=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def _record(self, service: str, outcome: str, start_time: float) -> None:
        if self.metrics is not None:
            self.metrics.record_downstream_call(service, outcome, time.monotonic() - start_time)


def _describe(exc: Exception) -> str:
    # ConnectError and friends often carry an empty message
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__
