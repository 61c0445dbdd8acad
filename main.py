"""
FastAPI application entry point
"""
import argparse
import os
from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from api.routes import prime as prime_routes
from api.middleware import RequestIDMiddleware, LoggingMiddleware
from application.ports.prime_backend import PrimeBackendPort
from application.services.prime_service import PrimeDispatcher
from core.config import Settings, settings as default_settings
from core.exceptions import register_exception_handlers
from core.response import health_body
from core.logging_config import get_logger, configure_logging
from domain.prime import BackendTarget
from infrastructure.external.prime import create_backend_client


# Configure logging explicitly at the entry point, not as an import side effect
configure_logging()
logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    backend: Optional[PrimeBackendPort] = None,
) -> FastAPI:
    """Assemble the application.

    The backend target is frozen here, once; ``backend`` replaces the
    client picked from it (tests, local dev).
    """
    settings = settings or default_settings
    target = BackendTarget.from_settings(settings.backend)
    client = backend if backend is not None else create_backend_client(target)

    ko_path = settings.KO_DATA_PATH
    logger.info("ko_data_path", path=ko_path)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        description="Highest prime lookup front end",
    )
    app.state.settings = settings
    app.state.backend_target = target
    app.state.dispatcher = PrimeDispatcher(client=client)
    app.state.templates = Jinja2Templates(directory=ko_path)

    # Middleware runs bottom-up: request id first, so the access log can use it
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.mount("/img", StaticFiles(directory=os.path.join(ko_path, "static", "img"), check_dir=False), name="img")
    app.mount("/css", StaticFiles(directory=os.path.join(ko_path, "static", "css"), check_dir=False), name="css")

    app.include_router(prime_routes.router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return health_body()

    logger.info(
        "application_configured",
        backend=target.address,
        authority=target.authority,
        protocol=client.protocol.value,
        insecure=target.insecure,
    )
    return app


def parse_args(argv: Optional[Sequence[str]] = None, base: Optional[Settings] = None) -> Settings:
    """Command-line flags override the environment for the backend group and port."""
    base = base or default_settings
    parser = argparse.ArgumentParser(description="Prime front end server")
    parser.add_argument("--backend", default=None,
                        help="The k8s service name (or host:port) to query the backend")
    parser.add_argument("--host", default=None,
                        help="The host name to use if the client runs outside of the cluster")
    parser.add_argument("--insecure", default=None, action=argparse.BooleanOptionalAction,
                        help="Skip TLS for gRPC calls (default: true)")
    parser.add_argument("--use_grpc", "--use-grpc", dest="use_grpc", default=None,
                        action=argparse.BooleanOptionalAction,
                        help="Use gRPC to talk to the backend")
    parser.add_argument("--port", type=int, default=None, help="Listening port (default: $PORT or 8080)")
    args = parser.parse_args(argv)

    backend_update = {
        key: value
        for key, value in (
            ("address", args.backend),
            ("host", args.host),
            ("insecure", args.insecure),
            ("use_grpc", args.use_grpc),
        )
        if value is not None
    }
    update: dict = {"backend": base.backend.model_copy(update=backend_update)}
    if args.port is not None:
        update["PORT"] = args.port
    return base.model_copy(update=update)


app = create_app()


if __name__ == "__main__":
    import uvicorn

    run_settings = parse_args()
    logger.info("server_starting", address=f":{run_settings.PORT}")
    uvicorn.run(
        create_app(run_settings),
        host="0.0.0.0",
        port=run_settings.PORT,
        log_level="debug" if run_settings.DEBUG else "info",
    )
