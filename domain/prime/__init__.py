from .entity import (
    INT64_MAX,
    INT64_MIN,
    BackendTarget,
    DispatchResult,
    PrimeRequest,
    PrimeResponse,
    Protocol,
)
from .validator import DEFAULT_QUERY, parse_query

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "BackendTarget",
    "DispatchResult",
    "PrimeRequest",
    "PrimeResponse",
    "Protocol",
    "DEFAULT_QUERY",
    "parse_query",
]
