from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

import httpx
from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from starlette.responses import JSONResponse, Response

from cinesage.cache import ResponseCache
from cinesage.catalog import TRENDING_KEYWORDS
from cinesage.config import Settings
from cinesage.errors import ApiError, Internal, InvalidInput, NotFound, RateLimited
from cinesage.logger import logger
from cinesage.recommend import RecommendationQuery, RecommendationResolver
from cinesage.upstream.chat import ChatClient
from cinesage.upstream.omdb import OmdbClient
from cinesage.utils import timed
from cinesage.validators import (parse_languages, validate_genre,
                                 validate_imdb_id, validate_limit,
                                 validate_page, validate_query,
                                 validate_sort_by, validate_type,
                                 validate_year)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

router = APIRouter(prefix="/api")


class ChatParams(BaseModel):
    message: Optional[str] = None
    conversationHistory: list[dict[str, Any]] = []


def _cache(request: Request, name: str) -> ResponseCache:
    return request.app.state.caches[name]


def _omdb(request: Request) -> OmdbClient:
    omdb: OmdbClient = request.app.state.omdb
    if not omdb.has_key:
        raise Internal("OMDb API key is not configured. Set OMDB_API_KEY in the environment.")
    return omdb


async def _cached(
    cache: ResponseCache, key: str, produce: Callable[[], Awaitable[dict[str, Any]]]
) -> JSONResponse:
    entry = await cache.get(key)
    if entry is not None:
        return JSONResponse({"success": True, **entry.data, "cached": True})
    data = await produce()
    await cache.put(key, data)
    return JSONResponse({"success": True, **data})


@router.get("/recommendations")
@timed
async def recommendations(
    request: Request,
    genre: Optional[str] = None,
    year: Optional[str] = None,
    page: int = 1,
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
    type_: Optional[str] = Query(default=None, alias="type"),
    languages: Optional[str] = None,
) -> JSONResponse:
    query = RecommendationQuery(
        genre=validate_genre(genre),
        year=validate_year(year, allow_range=True),
        page=validate_page(page),
        sort_by=validate_sort_by(sort_by),
        type=validate_type(type_),
        languages=parse_languages(languages),
    )
    resolver: RecommendationResolver = request.app.state.resolver
    payload = await resolver.resolve(query)
    return JSONResponse({"success": True, **payload})


@router.get("/search")
@timed
async def search(
    request: Request,
    q: Optional[str] = None,
    page: int = 1,
    year: Optional[str] = None,
    type_: Optional[str] = Query(default=None, alias="type"),
) -> JSONResponse:
    query = validate_query(q)
    page = validate_page(page)
    year = validate_year(year)
    type_ = validate_type(type_, default="both")
    omdb = _omdb(request)

    async def produce():
        try:
            result = await omdb.search(query, page=page, year=year, type_=type_)
        except NotFound:
            raise NotFound("No movies found matching your search criteria")
        return {
            "totalResults": result.total_results,
            "page": page,
            "results": [movie.to_dict() for movie in result.results],
        }

    key = f"search:{query.lower()}:{page}:{year or ''}:{type_}"
    return await _cached(_cache(request, "search"), key, produce)


@router.get("/movies/{movie_id}")
@timed
async def movie_details(request: Request, movie_id: str) -> JSONResponse:
    movie_id = validate_imdb_id(movie_id)
    omdb = _omdb(request)

    async def produce():
        try:
            movie = await omdb.get_title(movie_id)
        except NotFound:
            raise NotFound("Movie not found")
        return {"data": movie.to_dict()}

    return await _cached(_cache(request, "movie_details"), f"movie:{movie_id}", produce)


@router.get("/similar")
@timed
async def similar(request: Request, id: Optional[str] = None, limit: int = 10) -> JSONResponse:
    movie_id = validate_imdb_id(id)
    limit = validate_limit(limit)
    omdb = _omdb(request)

    key = f"similar:{movie_id}:{limit}"
    cache = _cache(request, "similar")
    entry = await cache.get(key)
    if entry is not None:
        return JSONResponse({"success": True, **entry.data, "cached": True})

    try:
        movie = await omdb.get_title(movie_id)
    except NotFound:
        raise NotFound("Movie not found")
    original = {"id": movie.id, "title": movie.title, "genres": list(movie.genre)}

    if not movie.genre:
        return JSONResponse({
            "success": True, "similar": [], "originalMovie": original, "count": 0,
            "message": "No genres found for this movie",
        })

    primary_genre = movie.genre[0].lower()
    try:
        candidates = await omdb.search(primary_genre, page=1, type_="movie")
    except NotFound:
        return JSONResponse({
            "success": True, "similar": [], "originalMovie": original, "count": 0,
            "message": "No similar movies found",
        })

    similar_movies = [
        candidate.to_dict()
        for candidate in candidates.results
        if candidate.id != movie_id and candidate.poster and candidate.year
    ][:limit]
    data = {"similar": similar_movies, "originalMovie": original, "count": len(similar_movies)}
    await cache.put(key, data)
    return JSONResponse({"success": True, **data})


@router.get("/trending")
@timed
async def trending(request: Request, limit: int = 10) -> JSONResponse:
    limit = validate_limit(limit)
    omdb = _omdb(request)

    async def produce():
        movies = []
        seen = set()
        for keyword in TRENDING_KEYWORDS:
            if len(movies) >= limit:
                break
            try:
                result = await omdb.search(keyword, page=1, type_="movie")
            except ApiError as exc:
                logger.warning(f"trending keyword {keyword!r} failed: {exc.message} {exc.detail or ''}")
                continue
            for movie in result.results:
                if len(movies) >= limit:
                    break
                if movie.id in seen or not movie.poster or not movie.year:
                    continue
                seen.add(movie.id)
                movies.append(movie.to_dict())
        return {
            "trending": movies,
            "count": len(movies),
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
        }

    return await _cached(_cache(request, "trending"), f"trending:{limit}", produce)


@router.post("/chat")
@timed
async def chat(request: Request, body: ChatParams) -> JSONResponse:
    if not body.message or not body.message.strip():
        raise InvalidInput("Message is required and must be a non-empty string")
    chat_client: ChatClient = request.app.state.chat
    reply = await chat_client.reply(body.message, body.conversationHistory)
    return JSONResponse({"success": True, "response": reply})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed with {exc.status_code}: {exc.message}")
    body = {"success": False, "message": exc.message}
    headers = None
    if isinstance(exc, RateLimited):
        body["retryAfter"] = exc.retry_after
        headers = {"Retry-After": str(exc.retry_after)}
    if request.app.state.settings.is_development and exc.detail:
        body["error"] = exc.detail
    return JSONResponse(body, status_code=exc.status_code, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = exc.errors()[0]
    field = error["loc"][-1] if error.get("loc") else "request"
    message = f"Invalid value for {field}: {error['msg']}"
    logger.error(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse({"success": False, "message": message}, status_code=400)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} crashed")
    body = {"success": False, "message": "An unexpected error occurred"}
    if request.app.state.settings.is_development:
        body["error"] = str(exc)
    # served by ServerErrorMiddleware, outside the cors middleware
    headers = {"Access-Control-Allow-Origin": CORS_HEADERS["Access-Control-Allow-Origin"]}
    return JSONResponse(body, status_code=500, headers=headers)


async def cors(request: Request, call_next) -> Response:
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers["Access-Control-Allow-Origin"] = CORS_HEADERS["Access-Control-Allow-Origin"]
    return response


def create_app(
    settings: Optional[Settings] = None,
    omdb_transport: Optional[httpx.AsyncBaseTransport] = None,
    chat_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="CineSage")
    app.state.settings = settings
    app.include_router(router)
    app.middleware("http")(cors)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.on_event("startup")
    @timed
    async def startup_event():
        app.state.omdb = OmdbClient(
            settings.omdb_api_key,
            base_url=settings.omdb_base_url,
            timeout=settings.upstream_timeout,
            transport=omdb_transport,
        )
        app.state.chat = ChatClient(
            settings.chat_token,
            model=settings.chat_model,
            url=settings.chat_url,
            timeout=settings.chat_timeout,
            transport=chat_transport,
        )
        app.state.caches = {
            ttl.name: ResponseCache(getattr(settings.cache_ttls, ttl.name), name=ttl.name)
            for ttl in fields(settings.cache_ttls)
        }
        app.state.resolver = RecommendationResolver(
            app.state.omdb, app.state.caches["recommendations"], settings.placeholder_poster
        )
        if not settings.omdb_api_key:
            logger.warning("OMDB_API_KEY is not set, recommendations fall back to the local catalog")
        if not settings.chat_token:
            logger.warning("HF_TOKEN is not set, the chat endpoint is disabled")

    @app.on_event("shutdown")
    async def shutdown_event():
        await app.state.omdb.aclose()
        await app.state.chat.aclose()

    return app


app = create_app()
