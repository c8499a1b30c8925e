"""Conversion of raised errors into HTTP responses.

Route handlers never write error responses themselves; they raise, and the
handlers installed here decide the response.
"""

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from wikisearch.search.client import SearchError
from wikisearch.search.service import InvalidPageError
from wikisearch.web.rendering import RenderError

HANDLED_ERRORS: tuple[type[Exception], ...] = (SearchError, InvalidPageError, RenderError)


async def handle_request_error(request: Request, exc: Exception) -> PlainTextResponse:
    """Log the failure against the request and answer 500 with the error text."""
    context = getattr(request.state, "context", None)
    if context is not None:
        context.logger.error("request failed: %s", exc, extra={"fields": {"error": str(exc)}})
    return PlainTextResponse(str(exc), status_code=500)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        return PlainTextResponse("404 page not found", status_code=404)
    return await http_exception_handler(request, exc)


def install_error_handlers(app: FastAPI) -> None:
    for error_type in HANDLED_ERRORS:
        app.add_exception_handler(error_type, handle_request_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
