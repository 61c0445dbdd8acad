"""
API dependencies - objects assembled once in main.create_app and kept on app.state.
"""
from fastapi import Request
from fastapi.templating import Jinja2Templates

from application.services.prime_service import PrimeDispatcher


async def get_dispatcher(request: Request) -> PrimeDispatcher:
    return request.app.state.dispatcher


async def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates
