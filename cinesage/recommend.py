"""
Genre recommendations resolved through a chain of fallback tiers.

Tiers are tried in order and the first one producing at least one title
wins:

    curated      hand-picked IMDb IDs for the genre
    search       OMDb search for the genre with every filter applied
    search-any-language
    search-relaxed   no language, year or type filter
    local        static catalog, no network access

Upstream failures inside a tier are logged and treated as "no result", so
the chain always ends with a (possibly empty) result set.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, NamedTuple, Optional

from cinesage.cache import ResponseCache
from cinesage.catalog import curated_ids, fallback_titles
from cinesage.errors import ApiError
from cinesage.filters import is_in_range, matches_language, matches_type, parse_year_range
from cinesage.logger import logger
from cinesage.models import MovieDetail, MovieSummary, YearRange
from cinesage.upstream.omdb import OmdbClient
from cinesage.utils import leading_int, timed

NETWORK_PAGE_SIZE = 10
LOCAL_PAGE_SIZE = 20
MISSING_KEY_WARNING = (
    "OMDb API key is not configured. Showing recommendations from the local catalog."
)


@dataclass(frozen=True)
class RecommendationQuery:
    genre: str
    year: Optional[str] = None
    page: int = 1
    sort_by: str = "relevance"
    type: str = "movie"
    languages: tuple[str, ...] = ()

    @property
    def year_range(self) -> Optional[YearRange]:
        return parse_year_range(self.year)

    def cache_key(self) -> str:
        languages = ",".join(self.languages) or "any"
        return (
            f"recommendations:{self.genre}:{self.year or 'any'}:{self.page}"
            f":{self.sort_by}:{self.type}:{languages}"
        )


class TierResult(NamedTuple):
    source: str
    results: list[MovieSummary]
    total_results: int
    page_size: int


@dataclass(frozen=True)
class CandidateFilter:
    year_range: Optional[YearRange] = None
    type: str = "both"
    languages: tuple[str, ...] = ()

    def accepts(self, detail: MovieDetail) -> bool:
        return (
            detail.poster is not None
            and is_in_range(detail.year, self.year_range)
            and matches_type(detail.type, self.type)
            and matches_language(detail.language, self.languages)
        )


Strategy = Callable[[set[str]], Awaitable[Optional[TierResult]]]


def sort_results(results: list[MovieSummary], sort_by: str) -> list[MovieSummary]:
    if sort_by == "year":
        return sorted(results, key=lambda movie: leading_int(movie.year) or 0, reverse=True)
    if sort_by == "title":
        return sorted(results, key=lambda movie: movie.title)
    return list(results)


class RecommendationResolver:
    def __init__(self, omdb: OmdbClient, cache: ResponseCache, placeholder_poster: str):
        self.omdb = omdb
        self.cache = cache
        self.placeholder_poster = placeholder_poster

    @timed
    async def resolve(self, query: RecommendationQuery) -> dict[str, Any]:
        if not self.omdb.has_key:
            logger.warning("no OMDb API key configured, using local catalog")
            tier = self.local_fallback(query)
            payload = self._payload(query, tier)
            payload["warning"] = MISSING_KEY_WARNING
            return payload

        key = query.cache_key()
        entry = await self.cache.get(key)
        if entry is not None:
            return {**entry.data, "cached": True}

        seen: set[str] = set()
        tier = None
        for name, strategy in self._strategies(query):
            tier = await strategy(seen)
            if tier is not None and tier.results:
                logger.info(f"{name} tier produced {len(tier.results)} titles for {key}")
                break
            logger.info(f"{name} tier produced nothing for {key}")
        else:
            tier = self.local_fallback(query)

        payload = self._payload(query, tier)
        await self.cache.put(key, payload)
        return payload

    def _strategies(self, query: RecommendationQuery) -> list[tuple[str, Strategy]]:
        year_range = query.year_range
        single_year = str(year_range.start) if year_range and year_range.start == year_range.end else None
        full = CandidateFilter(year_range, query.type, query.languages)
        any_language = CandidateFilter(year_range, query.type)
        relaxed = CandidateFilter()

        async def curated(seen):
            return await self._curated_tier(query, full, seen)

        async def search(seen):
            return await self._search_tier("search", query, single_year, query.type, full, seen)

        async def search_any_language(seen):
            return await self._search_tier(
                "search-any-language", query, single_year, query.type, any_language, seen
            )

        async def search_relaxed(seen):
            return await self._search_tier("search-relaxed", query, None, "both", relaxed, seen)

        return [
            ("curated", curated),
            ("search", search),
            ("search-any-language", search_any_language),
            ("search-relaxed", search_relaxed),
        ]

    async def _curated_tier(
        self, query: RecommendationQuery, flt: CandidateFilter, seen: set[str]
    ) -> Optional[TierResult]:
        ids = curated_ids(query.genre)
        start = (query.page - 1) * NETWORK_PAGE_SIZE
        page_ids = ids[start:start + NETWORK_PAGE_SIZE]
        if not page_ids:
            return None
        results = await self._collect(page_ids, flt, seen)
        return TierResult("curated", results, len(ids), NETWORK_PAGE_SIZE)

    async def _search_tier(
        self,
        name: str,
        query: RecommendationQuery,
        year: Optional[str],
        type_: str,
        flt: CandidateFilter,
        seen: set[str],
    ) -> Optional[TierResult]:
        try:
            page = await self.omdb.search(query.genre, page=query.page, year=year, type_=type_)
        except ApiError as exc:
            logger.warning(f"{name} tier search failed for {query.genre!r}: {exc.message} {exc.detail or ''}")
            return None
        results = await self._collect([movie.id for movie in page.results], flt, seen)
        return TierResult(name, results, page.total_results, NETWORK_PAGE_SIZE)

    async def _collect(self, ids, flt: CandidateFilter, seen: set[str]) -> list[MovieSummary]:
        results = []
        for imdb_id in ids:
            if imdb_id in seen:
                continue
            try:
                detail = await self.omdb.get_title(imdb_id)
            except ApiError as exc:
                logger.warning(f"skipping {imdb_id}: {exc.message} {exc.detail or ''}")
                continue
            if not flt.accepts(detail):
                continue
            seen.add(imdb_id)
            results.append(detail.summary())
        return results

    def local_fallback(self, query: RecommendationQuery) -> TierResult:
        year_range = query.year_range
        matching = [
            movie
            for movie in fallback_titles(query.genre)
            if matches_type(movie.type, query.type) and is_in_range(movie.year, year_range)
        ]
        start = (query.page - 1) * LOCAL_PAGE_SIZE
        page = [
            MovieSummary(movie.id, movie.title, movie.year, movie.type, self.placeholder_poster)
            for movie in matching[start:start + LOCAL_PAGE_SIZE]
        ]
        return TierResult("local", page, len(matching), LOCAL_PAGE_SIZE)

    def _payload(self, query: RecommendationQuery, tier: TierResult) -> dict[str, Any]:
        results = sort_results(tier.results, query.sort_by)
        return {
            "results": [movie.to_dict() for movie in results],
            "totalResults": tier.total_results,
            "page": query.page,
            "hasMore": tier.total_results > query.page * tier.page_size,
            "genre": query.genre,
            "yearRange": query.year,
            "sortBy": query.sort_by,
            "type": query.type,
            "languages": list(query.languages),
            "source": tier.source,
        }
