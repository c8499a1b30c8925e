"""HTTP client for the Wikipedia full-text search API."""

import logging

import httpx
from pydantic import ValidationError

from wikisearch.search.schemas import WikipediaSearchResponse

logger = logging.getLogger(__name__)

WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
DEFAULT_TIMEOUT = 30.0


class WikipediaClient:
    """Issues ``action=query&list=search`` requests and decodes the result.

    The underlying ``httpx.AsyncClient`` is owned by the caller, which is
    also responsible for its timeout and lifetime.
    """

    def __init__(self, http: httpx.AsyncClient, api_url: str = WIKIPEDIA_API_URL) -> None:
        self._http = http
        self._api_url = api_url

    async def search(
        self, query: str, page_size: int, offset: int
    ) -> WikipediaSearchResponse:
        """Fetch one batch of results for ``query`` starting at ``offset``."""
        params = self.build_params(query, page_size, offset)
        try:
            response = await self._http.get(self._api_url, params=params)
        except httpx.TransportError as e:
            raise SearchTransportError(self._api_url, e) from e

        if response.status_code != httpx.codes.OK:
            raise WikipediaAPIError(response.status_code, dump_response(response))

        try:
            return WikipediaSearchResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.debug("undecodable search payload: %r", response.content[:500])
            raise SearchDecodeError(e) from e

    @staticmethod
    def build_params(query: str, page_size: int, offset: int) -> dict[str, str | int]:
        """Query-string parameters for one search call. Encoding is left to httpx."""
        return {
            "action": "query",
            "list": "search",
            "prop": "info",
            "inprop": "url",
            "utf8": "",
            "format": "json",
            "origin": "*",
            "srlimit": page_size,
            "srsearch": query,
            "sroffset": offset,
        }


def new_http_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Shared outbound client. One per process, closed on shutdown."""
    return httpx.AsyncClient(timeout=timeout)


def dump_response(response: httpx.Response) -> str:
    """Render a response as raw HTTP: status line, headers, blank line, body."""
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.multi_items())
    return "\r\n".join(lines) + "\r\n\r\n" + response.text


class SearchError(Exception):
    """Base class for failures talking to the search API."""


class SearchTransportError(SearchError):
    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"search request to {url} failed: {cause!r}")


class WikipediaAPIError(SearchError):
    def __init__(self, status_code: int, dump: str) -> None:
        self.status_code = status_code
        self.dump = dump
        super().__init__(f"non 200 OK response from Wikipedia API: {dump}")


class SearchDecodeError(SearchError):
    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        super().__init__(f"malformed search response from Wikipedia API: {cause}")
