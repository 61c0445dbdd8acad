"""Domain-level business exceptions, shared by the domain and infrastructure layers.

The core layer only maps these onto HTTP responses; the domain layer must not
depend back on core.
"""
from __future__ import annotations

from typing import Optional
from shared.codes import BusinessCode


class BusinessException(Exception):
    """Base business exception."""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
        field: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        self.field = field
        super().__init__(self.message)


class InvalidArgument(BusinessException):
    """The query could not be parsed; never reaches the backend."""

    def __init__(self, message: str, *, value: Optional[str] = None):
        super().__init__(
            code=BusinessCode.PARAM_ERROR,
            message=message,
            error_type="InvalidArgument",
            details={"value": value} if value is not None else None,
            field="query",
        )


class BackendUnavailable(BusinessException):
    """Transport, dial or RPC failure while talking to the backend."""

    def __init__(
        self,
        message: str,
        *,
        protocol: Optional[str] = None,
        timed_out: bool = False,
        status: Optional[str] = None,
    ):
        details: dict = {}
        if protocol:
            details["protocol"] = protocol
        if timed_out:
            details["reason"] = "deadline_exceeded"
        if status:
            details["status"] = status
        super().__init__(
            code=BusinessCode.SERVICE_UNAVAILABLE,
            message=message,
            error_type="BackendUnavailable",
            details=details or None,
        )
        self.timed_out = timed_out
        self.status = status


class MalformedResponse(BusinessException):
    """The backend replied but the payload could not be decoded."""

    def __init__(self, message: str, *, body: Optional[bytes] = None):
        details = None
        if body is not None:
            details = {"body": body[:256].decode("utf-8", errors="replace")}
        super().__init__(
            code=BusinessCode.BACKEND_RESPONSE_ERROR,
            message=message,
            error_type="MalformedResponse",
            details=details,
        )


class BackendCallFailed(BusinessException):
    """Umbrella failure handed to the presentation layer by the dispatcher.

    Only the message text of the underlying cause is carried forward.
    """

    def __init__(self, cause: BaseException):
        message = getattr(cause, "message", None) or str(cause) or type(cause).__name__
        super().__init__(
            code=BusinessCode.BACKEND_CALL_FAILED,
            message=message,
            error_type="BackendCallFailed",
        )
        self.cause = cause
