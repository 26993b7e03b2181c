"""
Thin client for the CineSage HTTP API.

Takes any `httpx.Client` pointed at the server, which includes FastAPI's
`TestClient`.
"""

from typing import Any, Optional, Sequence

import httpx

from cinesage.validators import MIN_QUERY_LENGTH


class ApiClientError(Exception):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MovieApiClient:
    def __init__(self, http: httpx.Client, prefix: str = "/api"):
        self.http = http
        self.prefix = prefix

    def _handle(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not response.is_success:
            raise ApiClientError(data.get("message") or "An error occurred", response.status_code)
        return data

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        params = {k: v for k, v in (params or {}).items() if v is not None}
        return self._handle(self.http.get(f"{self.prefix}{path}", params=params))

    def search_movies(self, query: str, page: int = 1) -> dict[str, Any]:
        if not query or len(query.strip()) < MIN_QUERY_LENGTH:
            return {"results": [], "totalResults": 0, "page": 1}
        data = self.get("/search", {"q": query, "page": page})
        return {
            "results": data.get("results") or [],
            "totalResults": data.get("totalResults") or 0,
            "page": data.get("page") or 1,
        }

    def get_movie_details(self, movie_id: str) -> dict[str, Any]:
        if not movie_id:
            raise ValueError("Movie ID is required")
        return self.get(f"/movies/{movie_id}")["data"]

    def get_recommendations(
        self,
        genre: str,
        year: Optional[str] = None,
        page: int = 1,
        sort_by: Optional[str] = None,
        type_: Optional[str] = None,
        languages: Sequence[str] = (),
    ) -> dict[str, Any]:
        if not genre:
            raise ValueError("Genre is required")
        data = self.get("/recommendations", {
            "genre": genre,
            "year": year or None,
            "page": page,
            "sortBy": sort_by,
            "type": type_,
            "languages": ",".join(lang.lower() for lang in languages) or None,
        })
        return {
            "results": data.get("results") or [],
            "totalResults": data.get("totalResults") or 0,
            "page": data.get("page") or 1,
            "hasMore": data.get("hasMore") or False,
            "warning": data.get("warning"),
        }

    def get_trending_movies(self, limit: int = 10) -> dict[str, Any]:
        data = self.get("/trending", {"limit": limit})
        return {
            "trending": data.get("trending") or [],
            "count": data.get("count") or 0,
            "lastUpdated": data.get("lastUpdated"),
        }

    def get_similar_movies(self, movie_id: str, limit: int = 10) -> dict[str, Any]:
        if not movie_id:
            raise ValueError("Movie ID is required")
        data = self.get("/similar", {"id": movie_id, "limit": limit})
        return {
            "similar": data.get("similar") or [],
            "originalMovie": data.get("originalMovie"),
            "count": data.get("count") or 0,
        }

    def chat(self, message: str, history: Sequence[dict[str, Any]] = ()) -> str:
        response = self.http.post(
            f"{self.prefix}/chat",
            json={"message": message, "conversationHistory": list(history)},
        )
        return self._handle(response)["response"]
