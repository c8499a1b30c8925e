"""wikisearch FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from wikisearch.config import VERSION, Settings, get_settings
from wikisearch.search.client import WikipediaClient, new_http_client
from wikisearch.search.service import SearchService
from wikisearch.utils.logging import configure_logging
from wikisearch.web.errors import install_error_handlers
from wikisearch.web.middleware import RequestLoggingMiddleware
from wikisearch.web.rendering import PageRenderer
from wikisearch.web.router import get_renderer, get_search_service
from wikisearch.web.router import router as pages_router


def create_app(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the application.

    Logging and templates are set up immediately; the outbound HTTP client
    is opened in the lifespan unless one is passed in, in which case the
    caller owns it.
    """
    settings = settings or get_settings()
    logger = configure_logging(settings)
    renderer = PageRenderer(settings.template_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage the outbound client and service wiring."""
        if http_client is not None:
            client = http_client
        else:
            client = new_http_client(settings.request_timeout)
        search_service = SearchService(WikipediaClient(client, settings.wikipedia_api_url))
        app.dependency_overrides[get_search_service] = lambda: search_service
        yield

        if http_client is None:
            await client.aclose()
        logger.info("Wikipedia App Server closed")

    app = FastAPI(
        title="wikisearch",
        description="Wikipedia search front end with structured request logging",
        version=VERSION,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.logger = logger
    app.dependency_overrides[get_renderer] = lambda: renderer

    app.add_middleware(RequestLoggingMiddleware, logger=logger)
    install_error_handlers(app)

    app.mount("/assets", StaticFiles(directory=settings.assets_dir), name="assets")
    app.include_router(pages_router)
    return app


def main() -> None:
    load_dotenv()
    settings = get_settings()
    logger = configure_logging(settings)
    logger.bind(port=settings.port).info(
        "Starting Wikipedia App Server on port '%s'", settings.port
    )
    uvicorn.run(
        "wikisearch.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level="warning",
    )


if __name__ == "__main__":
    main()
