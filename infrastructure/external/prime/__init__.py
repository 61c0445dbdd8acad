"""Prime backend clients (HTTP, gRPC, in-memory)."""
from .http_client import HttpPrimeClient, decode_response
from .grpc_client import GrpcPrimeClient
from .inmemory import InMemoryPrimeBackend, largest_prime_at_most
from .factory import create_backend_client

__all__ = [
    "HttpPrimeClient",
    "GrpcPrimeClient",
    "InMemoryPrimeBackend",
    "create_backend_client",
    "decode_response",
    "largest_prime_at_most",
]
