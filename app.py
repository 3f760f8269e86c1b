"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_forward, handle_login
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from services.forwarding import ForwardingService
from services.upstream import UpstreamClient


def create_app(
    config: Config,
    logger: RequestLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.limits.max_connections,
            max_keepalive_connections=config.limits.max_keepalive_connections,
        )
        backend_client = httpx.AsyncClient(
            timeout=config.backend.timeout,
            limits=limits,
            follow_redirects=False,
            transport=transport,
        )
        # Only the caller's headers go upstream
        backend_client.headers.clear()
        header_builder = HeaderBuilder(strip_hop_by_hop=config.forward.strip_hop_by_hop)
        app.state.header_builder = header_builder
        app.state.upstream_client = UpstreamClient(backend_client)
        app.state.forwarding_service = ForwardingService(
            config=config,
            logger=logger,
            header_builder=header_builder,
        )
        try:
            yield
        finally:
            await backend_client.aclose()

    app = FastAPI(title="Backend Passthrough", version="0.1.0", lifespan=lifespan)

    @app.api_route("/api/{path:path}", methods=config.forward.methods)
    async def proxy_api(request: Request, path: str):
        return await handle_forward(request, path, config, logger)

    @app.get("/login")
    async def login_page(request: Request):
        return await handle_login(request, config, logger)

    return app
