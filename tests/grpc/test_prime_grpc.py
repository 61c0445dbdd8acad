import time
from typing import Tuple

import grpc
import pytest

from application.services.prime_service import PrimeDispatcher
from domain.common.exceptions import BackendCallFailed, BackendUnavailable
from domain.prime import BackendTarget, DispatchResult, PrimeRequest, PrimeResponse, Protocol
from infrastructure.external.prime import GrpcPrimeClient, largest_prime_at_most, proto


# Nothing answers on this address; SYNs are dropped or rejected
UNROUTABLE = "10.255.255.1:50051"


class FakePrimeService(proto.PrimeServiceServicer):
    def __init__(self):
        self.queries = []

    async def Get(self, request, context):  # type: ignore[override]
        self.queries.append(request.query)
        if request.query < 0:
            await context.abort(grpc.StatusCode.INVALID_ARGUMENT, "query must not be negative")
        return proto.Response(answer=largest_prime_at_most(request.query))


@pytest.fixture
async def prime_server() -> Tuple[str, FakePrimeService]:
    """In-process insecure gRPC server on an ephemeral port."""
    servicer = FakePrimeService()
    server = grpc.aio.server()
    proto.add_PrimeServiceServicer_to_server(servicer, server)
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()
    try:
        yield f"127.0.0.1:{port}", servicer
    finally:
        await server.stop(grace=None)


def _target(address: str, **kwargs) -> BackendTarget:
    return BackendTarget(address=address, use_grpc=True, **kwargs)


async def test_get_returns_answer(prime_server):
    address, servicer = prime_server
    client = GrpcPrimeClient(_target(address))

    response = await client.send(PrimeRequest(query=10))

    assert response == PrimeResponse(answer=7)
    assert servicer.queries == [10]


async def test_negative_sentinel_passes_through(prime_server):
    address, _ = prime_server
    response = await GrpcPrimeClient(_target(address)).send(PrimeRequest(query=1))
    assert response.answer == -1


async def test_authority_override_still_reaches_backend(prime_server):
    address, servicer = prime_server
    client = GrpcPrimeClient(_target(address, authority="grpc-prime.default.example.com"))

    response = await client.send(PrimeRequest(query=30))

    assert response.answer == 29
    assert servicer.queries == [30]


def test_channel_options_carry_authority():
    with_authority = GrpcPrimeClient(_target("backend:80", authority="prime.example.com"))
    without = GrpcPrimeClient(_target("backend:80"))
    assert with_authority._channel_options() == [("grpc.default_authority", "prime.example.com")]
    assert without._channel_options() == []


async def test_rpc_error_is_backend_unavailable(prime_server):
    address, _ = prime_server

    with pytest.raises(BackendUnavailable) as ei:
        await GrpcPrimeClient(_target(address)).send(PrimeRequest(query=-3))

    assert ei.value.status == "INVALID_ARGUMENT"
    assert "query must not be negative" in ei.value.message
    assert not ei.value.timed_out


async def test_unknown_service_is_backend_unavailable(prime_server):
    address, _ = prime_server
    client = GrpcPrimeClient(_target(address, grpc_service="other.PrimeService"))

    with pytest.raises(BackendUnavailable) as ei:
        await client.send(PrimeRequest(query=10))

    assert ei.value.status == "UNIMPLEMENTED"


async def test_dial_deadline_is_timeout_classified():
    client = GrpcPrimeClient(_target(UNROUTABLE, dial_timeout=0.5))

    start = time.monotonic()
    with pytest.raises(BackendUnavailable) as ei:
        await client.send(PrimeRequest(query=4))
    elapsed = time.monotonic() - start

    assert ei.value.timed_out
    assert ei.value.details["reason"] == "deadline_exceeded"
    assert elapsed < 3


async def test_dispatch_over_grpc(prime_server):
    address, _ = prime_server
    dispatcher = PrimeDispatcher(client=GrpcPrimeClient(_target(address)))

    result = await dispatcher.dispatch(PrimeRequest(query=100))

    assert result == DispatchResult(answer=97, protocol=Protocol.GRPC)


async def test_dispatch_over_unreachable_grpc_fails():
    dispatcher = PrimeDispatcher(client=GrpcPrimeClient(_target(UNROUTABLE, dial_timeout=0.5)))

    with pytest.raises(BackendCallFailed) as ei:
        await dispatcher.dispatch(PrimeRequest(query=4))

    assert isinstance(ei.value.cause, BackendUnavailable)
    assert ei.value.cause.timed_out


def _record_channels(client: GrpcPrimeClient) -> list:
    opened = []
    open_channel = client._open_channel

    def _open():
        channel = open_channel()
        opened.append(channel)
        return channel

    client._open_channel = _open  # type: ignore[method-assign]
    return opened


async def test_channel_closed_after_success(prime_server):
    address, _ = prime_server
    client = GrpcPrimeClient(_target(address))
    opened = _record_channels(client)

    await client.send(PrimeRequest(query=10))

    assert len(opened) == 1
    assert opened[0].get_state() == grpc.ChannelConnectivity.SHUTDOWN


async def test_channel_closed_after_rpc_error(prime_server):
    address, _ = prime_server
    client = GrpcPrimeClient(_target(address))
    opened = _record_channels(client)

    with pytest.raises(BackendUnavailable):
        await client.send(PrimeRequest(query=-1))

    assert opened[0].get_state() == grpc.ChannelConnectivity.SHUTDOWN


async def test_channel_closed_after_dial_timeout():
    client = GrpcPrimeClient(_target(UNROUTABLE, dial_timeout=0.3))
    opened = _record_channels(client)

    with pytest.raises(BackendUnavailable):
        await client.send(PrimeRequest(query=4))

    assert opened[0].get_state() == grpc.ChannelConnectivity.SHUTDOWN


def test_secure_channel_when_not_insecure(monkeypatch):
    calls = []
    credentials = object()
    monkeypatch.setattr(grpc, "ssl_channel_credentials", lambda: credentials)
    monkeypatch.setattr(grpc.aio, "secure_channel", lambda *a, **kw: calls.append(("secure", a, kw)) or "secure")
    monkeypatch.setattr(grpc.aio, "insecure_channel", lambda *a, **kw: calls.append(("insecure", a, kw)) or "insecure")

    secure = GrpcPrimeClient(_target("prime:443", insecure=False, authority="prime.example.com"))
    plain = GrpcPrimeClient(_target("prime:80"))

    assert secure._open_channel() == "secure"
    assert plain._open_channel() == "insecure"
    assert calls[0] == (
        "secure",
        ("prime:443", credentials),
        {"options": [("grpc.default_authority", "prime.example.com")]},
    )
    assert calls[1] == ("insecure", ("prime:80",), {"options": []})


async def test_tls_client_cannot_dial_plaintext_server(prime_server):
    address, servicer = prime_server
    client = GrpcPrimeClient(_target(address, insecure=False, dial_timeout=0.5))

    with pytest.raises(BackendUnavailable) as ei:
        await client.send(PrimeRequest(query=10))

    assert ei.value.timed_out
    assert servicer.queries == []
