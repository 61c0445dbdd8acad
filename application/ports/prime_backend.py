"""
Prime backend port (contracts-first).

The dispatcher only depends on this protocol; HTTP, gRPC and in-memory
implementations live in the infrastructure layer.
"""
from __future__ import annotations

from typing import Protocol as _Protocol

from domain.prime import PrimeRequest, PrimeResponse, Protocol


class PrimeBackendPort(_Protocol):
    """One logical prime backend reachable over a single wire protocol.

    ``send`` raises ``BackendUnavailable`` on transport/dial/RPC failure and
    ``MalformedResponse`` when the reply cannot be decoded.
    """

    protocol: Protocol

    async def send(self, request: PrimeRequest) -> PrimeResponse: ...


__all__ = ["PrimeBackendPort"]
