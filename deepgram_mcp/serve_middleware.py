"""Middleware for the deepgram-mcp HTTP server.

1. CorsPreflightMiddleware - Answer CORS preflight (OPTIONS) requests so
   browser-based MCP clients on other origins can call the endpoint.

2. TokenAuthMiddleware - Optional Bearer token authentication via the
   Authorization header.

Both are pure ASGI middleware rather than BaseHTTPMiddleware so streamed MCP
responses are not buffered.

Usage:
    from deepgram_mcp.serve_middleware import CorsPreflightMiddleware, TokenAuthMiddleware

    # Added last = outermost, so preflight never hits the token check
    app.add_middleware(TokenAuthMiddleware, token="my-secret-token")
    app.add_middleware(CorsPreflightMiddleware)
"""

from typing import Dict, Optional

from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send


CORS_PREFLIGHT_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CorsPreflightMiddleware:
    """Return an empty 204 with permissive CORS headers for every OPTIONS request.

    No other state is consulted: the response is the same whether or not the
    path exists or the caller is authenticated.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope.get("method") != "OPTIONS":
            await self.app(scope, receive, send)
            return

        response = Response(status_code=204, headers=CORS_PREFLIGHT_HEADERS)
        await response(scope, receive, send)


class TokenAuthMiddleware:
    """Pure ASGI middleware to require Bearer token authentication.

    Requests without a valid ``Authorization: Bearer <token>`` header get a
    401 Unauthorized response. When no token is configured (token=None), all
    requests are allowed through.

    Attributes:
        app: The wrapped ASGI application.
        token: The required Bearer token, or None to disable authentication.
    """

    def __init__(self, app: ASGIApp, token: Optional[str]) -> None:
        self.app = app
        self.token = token

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self.token is None:
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive, send)
        auth_header = request.headers.get("Authorization")

        if not auth_header:
            message = "Unauthorized: Missing Authorization header"
        elif not auth_header.startswith("Bearer "):
            message = "Unauthorized: Invalid Authorization header format (expected 'Bearer <token>')"
        elif auth_header[len("Bearer "):] != self.token:
            # Never log the token values
            message = "Unauthorized: Invalid token"
        else:
            await self.app(scope, receive, send)
            return

        response = Response(content=message, status_code=401, media_type="text/plain")
        await response(scope, receive, send)
