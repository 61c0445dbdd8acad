"""Application service that dispatches a prime lookup to the backend.

Keeps protocol selection and failure normalization out of the HTTP routes;
the concrete wire clients live in infrastructure.external.prime.
"""
from __future__ import annotations

from typing import Optional

from application.ports.prime_backend import PrimeBackendPort
from domain.common.exceptions import BackendCallFailed
from domain.prime import DispatchResult, PrimeRequest, Protocol, parse_query
from core.logging_config import get_logger


logger = get_logger(__name__)


class PrimeDispatcher:
    """Send each request through exactly one backend client.

    The client (and therefore the protocol) is fixed at construction time.
    No retries, no fallback to the other protocol.
    """

    def __init__(self, *, client: PrimeBackendPort) -> None:
        self._client = client

    @property
    def protocol(self) -> Protocol:
        return self._client.protocol

    async def dispatch(self, request: PrimeRequest) -> DispatchResult:
        protocol = self._client.protocol
        logger.info("dispatch_started", protocol=protocol.value, query=request.query)
        try:
            response = await self._client.send(request)
        except Exception as exc:
            logger.warning(
                "dispatch_failed",
                protocol=protocol.value,
                query=request.query,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise BackendCallFailed(exc) from exc
        logger.info("dispatch_succeeded", protocol=protocol.value, query=request.query, answer=response.answer)
        return DispatchResult(answer=response.answer, protocol=protocol)

    async def lookup(self, raw_query: Optional[str]) -> tuple[PrimeRequest, DispatchResult]:
        """Validate ``raw_query`` then dispatch it.

        ``InvalidArgument`` propagates untouched so no backend call is made.
        """
        request = parse_query(raw_query)
        return request, await self.dispatch(request)
