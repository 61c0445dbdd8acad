"""
JSON-over-HTTP prime backend client.

- POST ``{"query": n}`` to ``http://<address>/``
- optional Host header override (client outside the cluster)
- no timeout and no retries; a fresh connection per call
"""
from __future__ import annotations

import time
from typing import Dict, Optional

import httpx
from pydantic import BaseModel, Field, StrictInt, ValidationError

from core.logging_config import get_logger
from domain.common.exceptions import BackendUnavailable, MalformedResponse
from domain.prime import INT64_MAX, INT64_MIN, BackendTarget, PrimeRequest, PrimeResponse, Protocol


logger = get_logger(__name__)


class _WireResponse(BaseModel):
    """Expected reply body: ``{"answer": <int64>}``."""
    answer: StrictInt = Field(..., ge=INT64_MIN, le=INT64_MAX)


class HttpPrimeClient:
    """Talks to the backend with a plain HTTP POST."""

    protocol = Protocol.HTTP

    def __init__(
        self,
        target: BackendTarget,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._target = target
        self._url = target.http_url
        # Only used by tests to swap the network for httpx.MockTransport
        self._transport = transport

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._target.authority:
            headers["Host"] = self._target.authority
        return headers

    async def send(self, request: PrimeRequest) -> PrimeResponse:
        start = time.perf_counter()
        logger.info("http_backend_call", url=self._url, host=self._target.authority, query=request.query)
        try:
            # timeout=None: the HTTP path is deliberately unbounded
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(
                    self._url,
                    json=request.to_json(),
                    headers=self._build_headers(),
                )
                body = await response.aread()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("http_backend_unavailable", url=self._url, error=str(exc), error_type=type(exc).__name__)
            raise BackendUnavailable(
                f"POST {self._url} failed: {str(exc) or type(exc).__name__}",
                protocol=self.protocol.value,
            ) from exc

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "http_backend_response",
            url=self._url,
            status_code=response.status_code,
            elapsed_ms=round(elapsed_ms, 2),
        )
        if response.is_error:
            # The body is still decoded; a non-answer body ends up as MalformedResponse
            logger.warning("http_backend_error_status", url=self._url, status_code=response.status_code)
        return decode_response(body)


def decode_response(body: bytes) -> PrimeResponse:
    """Decode an HTTP reply body into a ``PrimeResponse``."""
    try:
        wire = _WireResponse.model_validate_json(body)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        reason = first.get("msg", "invalid payload")
        raise MalformedResponse(f"malformed backend response: {reason}", body=body) from exc
    return PrimeResponse(answer=wire.answer)
