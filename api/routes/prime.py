"""
Prime lookup routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.dependencies import get_dispatcher, get_templates
from api.presentation import TEMPLATE_NAME, default_context, page_context
from application.services.prime_service import PrimeDispatcher


router = APIRouter(tags=["Prime"])


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
):
    """Landing page with dummy initial values."""
    return templates.TemplateResponse(request, TEMPLATE_NAME, default_context())


@router.get(
    "/prime",
    response_class=HTMLResponse,
    responses={400: {"description": "Invalid query"}, 500: {"description": "Backend call failed"}},
)
async def prime(
    request: Request,
    query: Optional[str] = Query(None, description="Upper bound of the search (base-10 int64), defaults to 4"),
    dispatcher: PrimeDispatcher = Depends(get_dispatcher),
    templates: Jinja2Templates = Depends(get_templates),
):
    """Find the highest prime <= query through the configured backend.

    InvalidArgument (400) and BackendCallFailed (500) are rendered as
    ``{"error": ...}`` by the global exception handlers.
    """
    prime_request, result = await dispatcher.lookup(query)
    return templates.TemplateResponse(request, TEMPLATE_NAME, page_context(prime_request, result))
