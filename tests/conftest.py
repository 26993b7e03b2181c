from typing import Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from cinesage.config import Settings
from cinesage.main import create_app

POSTER = "https://m.media-amazon.com/images/poster.jpg"


def omdb_title(
    imdb_id: str,
    title: str,
    year: str,
    type_: str = "movie",
    language: Optional[str] = "English",
    poster: Optional[str] = POSTER,
    genre: str = "Horror",
) -> dict:
    return {
        "Title": title,
        "Year": year,
        "Rated": "R",
        "Released": "N/A",
        "Runtime": "104 min",
        "Genre": genre,
        "Director": "Jordan Peele",
        "Writer": "Jordan Peele",
        "Actors": "Daniel Kaluuya, Allison Williams",
        "Plot": "A plot.",
        "Language": language or "N/A",
        "Country": "United States",
        "Awards": "N/A",
        "Poster": poster or "N/A",
        "Ratings": [{"Source": "Internet Movie Database", "Value": "7.8/10"}],
        "Metascore": "85",
        "imdbRating": "7.8",
        "imdbVotes": "700,000",
        "imdbID": imdb_id,
        "Type": type_,
        "DVD": "N/A",
        "BoxOffice": "$176,196,665",
        "Production": "N/A",
        "Website": "N/A",
        "Response": "True",
    }


def _search_entry(title: dict) -> dict:
    return {key: title[key] for key in ("Title", "Year", "imdbID", "Type", "Poster")}


class FakeOmdb:
    """In-memory OMDb served through httpx.MockTransport."""

    def __init__(self):
        self.titles: dict[str, dict] = {}
        self.searches: dict[str, list[dict]] = {}
        self.failing: set[str] = set()
        self.totals: dict[str, int] = {}
        self.requests: list[dict[str, str]] = []

    def add_title(self, *args, **kwargs) -> dict:
        title = omdb_title(*args, **kwargs)
        self.titles[title["imdbID"]] = title
        return title

    def add_search(self, query: str, titles: list[dict], total: Optional[int] = None) -> None:
        self.searches[query.lower()] = titles
        for title in titles:
            self.titles.setdefault(title["imdbID"], title)
        if total is not None:
            self.totals[query.lower()] = total

    def count(self, key: str) -> int:
        return sum(1 for params in self.requests if key in params)

    def handler(self, request: httpx.Request) -> httpx.Response:
        params = dict(request.url.params)
        self.requests.append(params)
        if "i" in params:
            if params["i"] in self.failing:
                raise httpx.ReadTimeout("timed out", request=request)
            title = self.titles.get(params["i"])
            if title is None:
                return httpx.Response(200, json={"Response": "False", "Error": "Incorrect IMDb ID."})
            return httpx.Response(200, json=title)

        query = params.get("s", "").lower()
        if query in self.failing:
            raise httpx.ConnectError("connection refused", request=request)
        matches = [
            title
            for title in self.searches.get(query, [])
            if ("type" not in params or title["Type"] == params["type"])
            and ("y" not in params or title["Year"].startswith(params["y"]))
        ]
        page = int(params.get("page", "1"))
        page_matches = matches[(page - 1) * 10:page * 10]
        if not page_matches:
            return httpx.Response(200, json={"Response": "False", "Error": "Movie not found!"})
        total = self.totals.get(query, len(matches))
        return httpx.Response(200, json={
            "Search": [_search_entry(title) for title in page_matches],
            "totalResults": str(total),
            "Response": "True",
        })


@pytest.fixture
def fake_omdb() -> FakeOmdb:
    return FakeOmdb()


@pytest.fixture
def settings() -> Settings:
    return Settings(omdb_api_key="test-key", chat_token="hf-test", app_env="development")


@pytest.fixture
def api(fake_omdb, settings):
    app = create_app(settings, omdb_transport=httpx.MockTransport(fake_omdb.handler))
    with TestClient(app) as client:
        yield client
