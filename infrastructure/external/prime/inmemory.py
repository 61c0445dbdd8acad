"""In-memory implementation of PrimeBackendPort.

Computes the answer in-process. Useful for local dev and tests.
"""
from __future__ import annotations

from typing import List, Optional

from domain.common.exceptions import BackendUnavailable
from domain.prime import PrimeRequest, PrimeResponse, Protocol


NOT_FOUND = -1


def largest_prime_at_most(n: int) -> int:
    """Largest prime <= n, or ``NOT_FOUND`` when there is none."""
    if n < 2:
        return NOT_FOUND
    if n == 2:
        return 2
    candidate = n if n % 2 else n - 1
    while candidate >= 3:
        if _is_prime(candidate):
            return candidate
        candidate -= 2
    return 2


def _is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    i = 3
    while i * i <= n:
        if n % i == 0:
            return False
        i += 2
    return True


class InMemoryPrimeBackend:
    """Answers locally and records every request it was sent.

    ``answer`` pins a fixed reply; ``error`` makes every call fail.
    """

    def __init__(
        self,
        *,
        protocol: Protocol = Protocol.HTTP,
        answer: Optional[int] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.protocol = protocol
        self._answer = answer
        self._error = error
        self.requests: List[PrimeRequest] = []

    async def send(self, request: PrimeRequest) -> PrimeResponse:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        if self._answer is not None:
            return PrimeResponse(answer=self._answer)
        return PrimeResponse(answer=largest_prime_at_most(request.query))


def unreachable_backend(protocol: Protocol = Protocol.HTTP) -> InMemoryPrimeBackend:
    return InMemoryPrimeBackend(
        protocol=protocol,
        error=BackendUnavailable("backend unreachable", protocol=protocol.value),
    )
