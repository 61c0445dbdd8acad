"""
Shared business codes used across layers (Domain/Core/API).

This module provides a single source of truth to avoid drift between
multiple enum definitions scattered across the codebase.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Business status codes (single source)."""

    SUCCESS = 0

    # Parameter errors (1xxxx) -> HTTP 400
    PARAM_ERROR = 10000

    # System / backend errors (4xxxx) -> HTTP 500
    SYSTEM_ERROR = 40000
    SERVICE_UNAVAILABLE = 40003
    BACKEND_RESPONSE_ERROR = 40004
    BACKEND_CALL_FAILED = 40005

    @property
    def is_client_error(self) -> bool:
        return 10000 <= self.value < 20000


__all__ = ["BusinessCode"]
