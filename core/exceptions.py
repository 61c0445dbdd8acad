"""
Global exception handlers: every failure is answered as ``{"error": <message>}``.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse
import uuid
from starlette import status as http_status

from .response import error_body
from shared.codes import BusinessCode
from core.logging_config import get_logger
from domain.common.exceptions import BusinessException


def business_code_to_http_status(code: int) -> int:
    """Parameter errors (1xxxx) are the client's fault, everything else is ours."""
    try:
        bc = BusinessCode(code)
    except ValueError:
        return http_status.HTTP_500_INTERNAL_SERVER_ERROR
    if bc.is_client_error:
        return http_status.HTTP_400_BAD_REQUEST
    return http_status.HTTP_500_INTERNAL_SERVER_ERROR


def _request_id(request: Request) -> str:
    return getattr(getattr(request, "state", object()), "request_id", None) or str(uuid.uuid4())


def register_exception_handlers(app: FastAPI):
    """
    Register global exception handlers.

    Args:
        app: FastAPI application
    """

    logger = get_logger(__name__)

    @app.exception_handler(BusinessException)
    async def business_exception_handler(request: Request, exc: BusinessException):
        """Domain failures (invalid query, backend call failed)."""
        status_code = business_code_to_http_status(exc.code)
        log = logger.warning if status_code < 500 else logger.error
        log(
            "business_error",
            request_id=_request_id(request),
            code=int(exc.code),
            error_type=exc.error_type,
            error=exc.message,
        )
        return JSONResponse(status_code=status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        return JSONResponse(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            content=error_body(str(first_error.get("msg", "invalid request"))),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Anything uncaught: log with stack, answer a generic 500."""
        logger.error(
            "unhandled_exception",
            request_id=_request_id(request),
            error=str(exc),
            exc_info=True,
        )
        message = str(exc) if app.debug else "internal server error"
        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(message),
        )
