"""Response hardening for a JSON-only API.

Nothing served here is meant to be rendered, framed or cached by a browser, so
every response gets a deny-all content policy. Request bodies are capped before
they reach the routers: the largest legitimate payload is a product document.
"""
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

JSON_API_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Cross-Origin-Resource-Policy": "same-site",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}

BODY_METHODS = {"POST", "PUT", "PATCH"}


def _is_https(request: Request) -> bool:
    return (
        request.url.scheme == "https"
        or request.headers.get("x-forwarded-proto", "").split(",")[0].strip() == "https"
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, max_body_bytes: int, hsts_max_age: int = 0):
        super().__init__(app)
        self.max_body_bytes = max_body_bytes
        self.hsts_max_age = hsts_max_age

    def _reject_oversized(self, request: Request) -> Response | None:
        if request.method not in BODY_METHODS:
            return None
        content_length = request.headers.get("content-length")
        if content_length is None:
            return None
        if not content_length.isdigit():
            return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length header"})
        if int(content_length) > self.max_body_bytes:
            logger.warning(
                "Rejected %s %s with %s byte body",
                request.method, request.url.path, content_length,
            )
            return JSONResponse(status_code=413, content={"detail": "Request body too large"})
        return None

    async def dispatch(self, request: Request, call_next) -> Response:
        response = self._reject_oversized(request) or await call_next(request)
        response.headers.update(JSON_API_HEADERS)
        if self.hsts_max_age and _is_https(request):
            response.headers["Strict-Transport-Security"] = (
                f"max-age={self.hsts_max_age}; includeSubDomains"
            )
        return response
