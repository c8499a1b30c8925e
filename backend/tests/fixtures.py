"""Shared test helpers: canned Wikipedia payloads and a fake upstream API."""

import asyncio
from typing import Any

import httpx

from wikisearch.search.schemas import WikipediaSearchResponse


def make_result_row(query: str, index: int) -> dict[str, Any]:
    """One entry of ``query.search`` as the API returns it."""
    return {
        "ns": 0,
        "title": f"{query.title()} article {index}",
        "pageid": 1000 + index,
        "size": 2048 + index,
        "wordcount": 300 + index,
        "snippet": f'About <span class="searchmatch">{query}</span> number {index}',
        "timestamp": "2024-05-01T12:30:00Z",
    }


def make_search_payload(
    query: str = "golang",
    total_hits: int = 55,
    offset: int = 0,
    limit: int = 20,
) -> dict[str, Any]:
    """A ``list=search`` response body holding the rows for one batch."""
    count = max(0, min(limit, total_hits - offset))
    payload: dict[str, Any] = {
        "batchcomplete": "",
        "query": {
            "searchinfo": {"totalhits": total_hits},
            "search": [make_result_row(query, offset + i + 1) for i in range(count)],
        },
    }
    if offset + count < total_hits:
        payload["continue"] = {"sroffset": offset + count, "continue": "-||"}
    return payload


def make_search_response(**kwargs: Any) -> WikipediaSearchResponse:
    return WikipediaSearchResponse.model_validate(make_search_payload(**kwargs))


class FakeWikipedia:
    """Stand-in for the search endpoint, served through ``httpx.MockTransport``.

    By default it answers with generated results for whatever ``srsearch``,
    ``srlimit`` and ``sroffset`` it is asked for. Set ``status_code`` and
    ``body`` to answer with something else, or ``error`` to fail the
    transport.
    """

    def __init__(self, total_hits: int = 55) -> None:
        self.total_hits = total_hits
        self.status_code = 200
        self.body: bytes | None = None
        self.headers: dict[str, str] = {}
        self.error: Exception | None = None
        self.delay = 0.0
        self.requests: list[httpx.Request] = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if self.body is not None:
            return httpx.Response(self.status_code, content=self.body, headers=self.headers)

        params = request.url.params
        payload = make_search_payload(
            query=params["srsearch"],
            total_hits=self.total_hits,
            offset=int(params["sroffset"]),
            limit=int(params["srlimit"]),
        )
        return httpx.Response(self.status_code, json=payload, headers=self.headers)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_params(self) -> httpx.QueryParams:
        return self.requests[-1].url.params
