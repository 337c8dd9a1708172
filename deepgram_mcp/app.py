"""HTTP application for deepgram-mcp."""

import logging
from typing import Optional

from starlette.applications import Starlette

from .serve_middleware import CorsPreflightMiddleware, TokenAuthMiddleware

logger = logging.getLogger("deepgram-mcp")

TRANSPORT_PATHS = {
    "streamable-http": "/mcp",
    "sse": "/sse",
}


def endpoint_path(transport: str) -> str:
    """URL path the MCP endpoint is mounted at for ``transport``."""
    try:
        return TRANSPORT_PATHS[transport]
    except KeyError:
        raise ValueError(f"Unsupported transport: {transport}") from None


def create_app(transport: str = "streamable-http", token: Optional[str] = None) -> Starlette:
    """Build the ASGI app serving the MCP endpoint.

    OPTIONS preflight is answered before the token check so browsers can
    discover the endpoint without credentials.
    """
    from .server import mcp

    path = endpoint_path(transport)
    app = mcp.http_app(path=path, transport=transport)

    # Starlette applies middleware in reverse order of addition
    if token:
        app.add_middleware(TokenAuthMiddleware, token=token)
        logger.info("Bearer token authentication enabled")
    app.add_middleware(CorsPreflightMiddleware)

    return app
