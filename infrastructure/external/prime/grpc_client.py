from __future__ import annotations

import asyncio
import time
from typing import List, Tuple

import grpc

from core.logging_config import get_logger
from domain.common.exceptions import BackendUnavailable
from domain.prime import BackendTarget, PrimeRequest, PrimeResponse, Protocol
from infrastructure.external.prime import proto


logger = get_logger(__name__)


class GrpcPrimeClient:
    """Calls ``PrimeService.Get`` over a per-call gRPC channel.

    Only the dial is bounded (``target.dial_timeout``); the unary call itself
    carries no deadline.
    """

    protocol = Protocol.GRPC

    def __init__(self, target: BackendTarget) -> None:
        self._target = target

    def _channel_options(self) -> List[Tuple[str, str]]:
        options: List[Tuple[str, str]] = []
        if self._target.authority:
            options.append(("grpc.default_authority", self._target.authority))
        return options

    def _open_channel(self) -> grpc.aio.Channel:
        options = self._channel_options()
        if self._target.insecure:
            return grpc.aio.insecure_channel(self._target.address, options=options)
        return grpc.aio.secure_channel(
            self._target.address,
            grpc.ssl_channel_credentials(),
            options=options,
        )

    async def send(self, request: PrimeRequest) -> PrimeResponse:
        address = self._target.address
        logger.info(
            "grpc_dialing",
            address=address,
            authority=self._target.authority,
            insecure=self._target.insecure,
        )
        start = time.perf_counter()
        async with self._open_channel() as channel:
            try:
                await asyncio.wait_for(channel.channel_ready(), timeout=self._target.dial_timeout)
            except asyncio.TimeoutError as exc:
                logger.warning("grpc_dial_failed", address=address, timeout=self._target.dial_timeout)
                raise BackendUnavailable(
                    f"failed to dial {address}: deadline exceeded after {self._target.dial_timeout:g}s",
                    protocol=self.protocol.value,
                    timed_out=True,
                ) from exc

            stub = proto.PrimeServiceStub(channel, self._target.grpc_service)
            try:
                reply = await stub.Get(proto.Request(query=request.query))
            except grpc.aio.AioRpcError as exc:
                status = exc.code()
                logger.warning(
                    "grpc_call_failed",
                    address=address,
                    status=status.name,
                    details=exc.details(),
                )
                raise BackendUnavailable(
                    f"PrimeService.Get failed: {status.name}: {exc.details()}",
                    protocol=self.protocol.value,
                    status=status.name,
                ) from exc

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("grpc_response", address=address, answer=reply.answer, elapsed_ms=round(elapsed_ms, 2))
        return PrimeResponse(answer=reply.answer)
