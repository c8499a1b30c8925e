"""Search page orchestration: parameters in, paginated results out."""

import logging
import re

from wikisearch.context import RequestContext
from wikisearch.search.client import WikipediaClient
from wikisearch.search.pagination import PageState, build_page_state

PAGE_SIZE = 20

_PAGE_NUMBER = re.compile(r"[+-]?[0-9]+")

# Largest value a 64-bit signed integer holds
MAX_PAGE = 2**63 - 1


class SearchService:
    """Runs one page of a Wikipedia search for the web layer."""

    def __init__(self, client: WikipediaClient, page_size: int = PAGE_SIZE) -> None:
        self._client = client
        self._page_size = page_size

    async def search_page(
        self, query: str, page: str, context: RequestContext
    ) -> PageState:
        """Search ``query`` and return the view model for page ``page``.

        ``page`` is the raw query-string value; an empty value means page 1.
        Raises InvalidPageError before any upstream call if it is not a
        positive base-10 integer. Client errors propagate unchanged.
        """
        page = page or "1"
        log = context.bind(search_query=query, page_num=page)
        log.info("incoming search query '%s' on page '%s'", query, page)

        page_number = parse_page_number(page)
        offset = (page_number - 1) * self._page_size

        response = await self._client.search(query, self._page_size, offset)
        if log.isEnabledFor(logging.DEBUG):
            log.debug(
                "wikipedia search response",
                extra={"fields": {"wikipedia_search_response": response.model_dump(mode="json")}},
            )

        state = build_page_state(query, response, self._page_size, page_number)
        log.debug("search query '%s' succeeded without errors", query)
        return state


def parse_page_number(raw: str) -> int:
    if not _PAGE_NUMBER.fullmatch(raw):
        raise InvalidPageError(raw)
    number = int(raw)
    if not 1 <= number <= MAX_PAGE:
        raise InvalidPageError(raw)
    return number


class InvalidPageError(ValueError):
    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"invalid page number: {raw!r}")
