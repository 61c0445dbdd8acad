"""
Response payloads shared by the HTTP surface.
"""
from typing import Any

from pydantic import BaseModel


class ErrorBody(BaseModel):
    """Error payload: ``{"error": <message>}``."""
    error: str


def error_body(message: str) -> dict[str, Any]:
    """
    Build the JSON error payload.

    Args:
        message: human readable error text

    Returns:
        dict: ``{"error": message}``
    """
    return ErrorBody(error=message).model_dump()


def health_body() -> dict[str, Any]:
    return {"status": "healthy"}
