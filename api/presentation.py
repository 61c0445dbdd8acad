"""Template context for ``index.html``.

The protocol tag only picks a cosmetic variant (logo and message of the day).
"""
from __future__ import annotations

from typing import Any, Dict

from domain.prime import DispatchResult, PrimeRequest, Protocol


TEMPLATE_NAME = "index.html"

HTTP_NOT_FOUND_LOGO = "img/knative-logo2.png"
GRPC_LOGO = "img/knative-logo3.png"

MOTD = {
    Protocol.HTTP: "Good Ol' HTTP is in play 'ere!",
    Protocol.GRPC: "Brought to you the gRPC!",
}


def format_result(answer: int) -> str:
    return f"Highest prime: {answer}"


def page_context(request: PrimeRequest, result: DispatchResult) -> Dict[str, Any]:
    if result.protocol is Protocol.GRPC:
        logo = GRPC_LOGO
    else:
        logo = HTTP_NOT_FOUND_LOGO if result.answer < 0 else ""
    return {
        "max": request.query,
        "result": format_result(result.answer),
        "altLogo": logo,
        "motd": MOTD[result.protocol],
    }


def default_context() -> Dict[str, Any]:
    """Placeholder values for the landing page; no backend call."""
    return {
        "max": 4,
        "result": format_result(3),
        "altLogo": "",
        "motd": "",
    }
