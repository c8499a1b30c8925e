"""Pagination view model for a page of search results."""

import math

from pydantic import BaseModel, ConfigDict

from wikisearch.search.schemas import WikipediaSearchResponse


class PageState(BaseModel):
    """What the results template needs to draw one page and its navigation.

    ``next_page`` is stored already advanced past the page being shown;
    the current and previous page numbers are derived from it.
    """

    model_config = ConfigDict(frozen=True)

    query: str
    total_pages: int
    next_page: int
    results: WikipediaSearchResponse

    @property
    def current_page(self) -> int:
        if self.next_page == 1:
            return self.next_page
        return self.next_page - 1

    @property
    def previous_page(self) -> int:
        return self.current_page - 1

    @property
    def is_last_page(self) -> bool:
        return self.next_page >= self.total_pages


def build_page_state(
    query: str,
    response: WikipediaSearchResponse,
    page_size: int,
    requested_page: int,
) -> PageState:
    return PageState(
        query=query,
        total_pages=math.ceil(response.total_hits / page_size),
        next_page=requested_page + 1,
        results=response,
    )
