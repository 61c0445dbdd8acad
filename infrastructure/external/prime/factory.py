"""Build the backend client selected by the static protocol flag."""
from core.logging_config import get_logger
from application.ports.prime_backend import PrimeBackendPort
from domain.prime import BackendTarget, Protocol
from .http_client import HttpPrimeClient
from .grpc_client import GrpcPrimeClient

logger = get_logger(__name__)


def create_backend_client(target: BackendTarget) -> PrimeBackendPort:
    """Return the gRPC client when ``target.use_grpc`` is set, HTTP otherwise."""
    if target.protocol is Protocol.GRPC:
        client: PrimeBackendPort = GrpcPrimeClient(target)
    else:
        client = HttpPrimeClient(target)
    logger.info(
        "prime_backend_selected",
        protocol=target.protocol.value,
        address=target.address,
        authority=target.authority,
    )
    return client
