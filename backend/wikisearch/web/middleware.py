"""Request logging and per-request fault isolation."""

import time

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from wikisearch.context import RequestContext
from wikisearch.utils.logging import BoundLogger

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Attaches a RequestContext to every request and logs one line per response.

    An exception escaping the route is logged here and answered with a 500,
    so it only affects the request that raised it.
    """

    def __init__(self, app: ASGIApp, logger: BoundLogger) -> None:
        super().__init__(app)
        self.logger = logger

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        context = RequestContext.new(self.logger)
        request.state.context = context

        try:
            response = await call_next(request)
        except Exception:
            context.logger.exception("unhandled error while serving %s", request.url.path)
            response = PlainTextResponse("Internal Server Error", status_code=500)

        response.headers[CORRELATION_HEADER] = context.correlation_id
        context.logger.info(
            "incoming request",
            extra={
                "fields": {
                    "method": request.method,
                    "url": _request_uri(request),
                    "user_agent": request.headers.get("user-agent", ""),
                    "status_code": response.status_code,
                    "elapsed_ms": round((time.perf_counter() - start) * 1000, 3),
                }
            },
        )
        return response


def _request_uri(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path
