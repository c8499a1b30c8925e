"""HTML routes: the search form and the results page."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse

from wikisearch.context import RequestContext
from wikisearch.search.service import SearchService
from wikisearch.web.rendering import PAGE_TEMPLATE, PageRenderer

router = APIRouter(tags=["pages"])


def get_search_service() -> SearchService:
    """Dependency placeholder — overridden at startup."""
    raise RuntimeError("SearchService not configured")


def get_renderer() -> PageRenderer:
    """Dependency placeholder — overridden at startup."""
    raise RuntimeError("PageRenderer not configured")


def get_request_context(request: Request) -> RequestContext:
    return request.state.context


@router.get("/", response_class=HTMLResponse)
async def index(renderer: PageRenderer = Depends(get_renderer)) -> HTMLResponse:
    return renderer.render(PAGE_TEMPLATE, search=None)


@router.get("/search", response_class=HTMLResponse)
async def search(
    q: str = Query(""),
    page: str = Query("1"),
    context: RequestContext = Depends(get_request_context),
    service: SearchService = Depends(get_search_service),
    renderer: PageRenderer = Depends(get_renderer),
) -> HTMLResponse:
    """Run a search and render one page of results."""
    state = await service.search_page(q, page, context)
    return renderer.render(PAGE_TEMPLATE, search=state)
