"""
Async client for the OMDb API.

Transport failures and OMDb error payloads are translated into ApiError
subclasses so callers only deal with one family of exceptions.
"""

from typing import Any, NamedTuple, Optional

import httpx

from cinesage.config import OMDB_BASE_URL
from cinesage.errors import NotFound, RateLimited, UpstreamError, UpstreamUnavailable
from cinesage.logger import get_logger
from cinesage.models import MovieDetail, MovieSummary, detail_from_omdb, summary_from_omdb

logger = get_logger(__name__)

NOT_FOUND_ERRORS = {"Movie not found!", "Incorrect IMDb ID.", "Series or episode not found!"}
RATE_LIMIT_ERROR = "Request limit reached!"
DEFAULT_RETRY_AFTER = 60


class SearchPage(NamedTuple):
    results: list[MovieSummary]
    total_results: int


def retry_after_seconds(response: httpx.Response, default: int = DEFAULT_RETRY_AFTER) -> int:
    value = response.headers.get("Retry-After")
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class OmdbClient:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = OMDB_BASE_URL,
        timeout: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self._client = httpx.AsyncClient(timeout=httpx.Timeout(timeout), transport=transport)

    @property
    def has_key(self) -> bool:
        return bool(self.api_key)

    async def _get(self, params: dict[str, Any]) -> dict[str, Any]:
        query = {"apikey": self.api_key, **{k: v for k, v in params.items() if v is not None}}
        try:
            response = await self._client.get(self.base_url, params=query)
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable("The movie service timed out", detail=str(exc))
        except httpx.RequestError as exc:
            raise UpstreamUnavailable(
                "Could not reach the movie service", detail=str(exc), status_code=502
            )

        if response.status_code == 429:
            raise RateLimited(
                "Movie service rate limit exceeded. Please try again later.",
                retry_after=retry_after_seconds(response),
            )
        if response.status_code in (502, 503):
            raise UpstreamUnavailable(
                "Movie service temporarily unavailable",
                detail=f"OMDb API returned status {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError:
            raise UpstreamError(
                "Invalid response from the movie service",
                detail=f"status={response.status_code}: {response.text[:300]}",
            )

        if isinstance(data, dict) and data.get("Response") == "False":
            _raise_omdb_error(data.get("Error") or "Failed to fetch data from OMDb API")
        if not response.is_success:
            raise UpstreamError(
                "An error occurred while contacting the movie service",
                detail=f"OMDb API returned status {response.status_code}",
            )
        if not isinstance(data, dict):
            raise UpstreamError(
                "Invalid response from the movie service",
                detail=f"expected a JSON object, got {type(data).__name__}",
            )
        return data

    async def get_title(self, imdb_id: str, plot: str = "full") -> MovieDetail:
        data = await self._get({"i": imdb_id, "plot": plot})
        return detail_from_omdb(data)

    async def search(
        self,
        query: str,
        page: int = 1,
        year: Optional[str] = None,
        type_: Optional[str] = None,
    ) -> SearchPage:
        data = await self._get(
            {"s": query, "page": str(page), "y": year, "type": type_ if type_ != "both" else None}
        )
        results = [summary_from_omdb(item) for item in data.get("Search") or []]
        try:
            total = int(data.get("totalResults") or 0)
        except ValueError:
            total = len(results)
        logger.debug(f"OMDb search {query!r} page {page}: {len(results)} of {total}")
        return SearchPage(results=results, total_results=total)

    async def aclose(self) -> None:
        await self._client.aclose()


def _raise_omdb_error(message: str) -> None:
    if message in NOT_FOUND_ERRORS:
        raise NotFound(message)
    if message == RATE_LIMIT_ERROR:
        raise RateLimited("Movie service request limit reached", detail=message)
    raise UpstreamError("An error occurred while contacting the movie service", detail=message)
