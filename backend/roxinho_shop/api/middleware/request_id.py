import logging
import re
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("roxinho_shop.access")

_REQUEST_ID_RE = re.compile(r"^[a-zA-Z0-9\-_.]{1,128}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(header_value: str | None) -> str:
    """Reuse a well-formed client ``X-Request-ID``, otherwise mint one."""
    if header_value and _REQUEST_ID_RE.match(header_value):
        return header_value
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id and writes one access log line for it.

    uvicorn's own access log is silenced in ``setup_logging`` so this line,
    which carries the request id, is the only one per request.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get("X-Request-ID"))
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        start = time.monotonic()
        try:
            response = await call_next(request)
            logger.info(
                "%s %s -> %d",
                request.method, request.url.path, response.status_code,
                extra={"duration_ms": round((time.monotonic() - start) * 1000)},
            )
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response
