"""
Prime lookup domain values.

Every value here is immutable: a request/response lives for a single
dispatch, the backend target for the whole process.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _check_int64(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{name} {value} does not fit in int64")


class Protocol(str, Enum):
    """Wire protocol used to reach the backend."""
    HTTP = "http"
    GRPC = "grpc"


@dataclass(frozen=True)
class PrimeRequest:
    """Unit of work sent to the backend: find the largest prime <= query."""

    query: int

    def __post_init__(self) -> None:
        _check_int64("query", self.query)

    def to_json(self) -> dict[str, int]:
        return {"query": self.query}


@dataclass(frozen=True)
class PrimeResponse:
    """Backend answer; negative when no prime was found."""

    answer: int

    def __post_init__(self) -> None:
        _check_int64("answer", self.answer)

    @property
    def found(self) -> bool:
        return self.answer >= 0


@dataclass(frozen=True)
class DispatchResult:
    """Normalized outcome of one successful dispatch."""

    answer: int
    protocol: Protocol


@dataclass(frozen=True)
class BackendTarget:
    """Where and how to reach the backend. Built once at startup."""

    address: str
    authority: Optional[str] = None
    insecure: bool = True
    use_grpc: bool = False
    dial_timeout: float = 4.0
    grpc_service: str = "proto.PrimeService"

    @property
    def protocol(self) -> Protocol:
        return Protocol.GRPC if self.use_grpc else Protocol.HTTP

    @property
    def http_url(self) -> str:
        return f"http://{self.address}/"

    @classmethod
    def from_settings(cls, backend: Any) -> "BackendTarget":
        """Freeze a ``BackendSettings`` group (or anything shaped like it)."""
        return cls(
            address=backend.address,
            authority=backend.host or None,
            insecure=bool(backend.insecure),
            use_grpc=bool(backend.use_grpc),
            dial_timeout=float(backend.dial_timeout),
            grpc_service=backend.grpc_service,
        )
