"""Wire shapes of the Wikipedia ``list=search`` API response.

Missing fields decode to zero values: the API answers some invalid requests
(an empty ``srsearch``, for one) with 200 and an ``error`` object instead of
``query``, and that renders as an empty result page. Values of the wrong
type still fail validation.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)


class SearchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    ns: int = 0
    title: str = ""
    pageid: int = 0
    size: int = 0
    wordcount: int = 0
    snippet: str = ""  # may contain <span class="searchmatch"> markup
    timestamp: datetime = ZERO_TIME


class SearchContinue(BaseModel):
    """Cursor for the next batch of results."""

    model_config = ConfigDict(populate_by_name=True)

    sroffset: int = 0
    continue_token: str = Field("", alias="continue")


class SearchInfo(BaseModel):
    totalhits: int = 0


class SearchQuery(BaseModel):
    searchinfo: SearchInfo = Field(default_factory=SearchInfo)
    search: list[SearchResult] = Field(default_factory=list)


class WikipediaSearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    batchcomplete: str | bool = ""
    continuation: SearchContinue = Field(default_factory=SearchContinue, alias="continue")
    query: SearchQuery = Field(default_factory=SearchQuery)

    @property
    def total_hits(self) -> int:
        return self.query.searchinfo.totalhits

    @property
    def results(self) -> list[SearchResult]:
        return self.query.search
