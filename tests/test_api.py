import httpx
from fastapi.testclient import TestClient

from cinesage.config import Settings
from cinesage.main import create_app
from conftest import omdb_title


def _app_with_handler(handler, **settings_kwargs) -> TestClient:
    settings = Settings(**{"omdb_api_key": "test-key", **settings_kwargs})
    return TestClient(create_app(settings, omdb_transport=httpx.MockTransport(handler)))


def test_preflight(api):
    response = api.options("/api/recommendations")
    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert "GET" in response.headers["access-control-allow-methods"]


def test_responses_allow_any_origin(api):
    response = api.get("/api/recommendations", params={"genre": "horror"})
    assert response.headers["access-control-allow-origin"] == "*"


def test_recommendations_invalid_genre(api):
    response = api.get("/api/recommendations", params={"genre": "xyz"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "Must be one of: action, adventure" in body["message"]


def test_recommendations_invalid_page(api, fake_omdb):
    assert api.get("/api/recommendations", params={"genre": "drama", "page": 0}).status_code == 400
    response = api.get("/api/recommendations", params={"genre": "drama", "page": "abc"})
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert fake_omdb.requests == []


def test_recommendations_invalid_year_and_type(api):
    assert api.get("/api/recommendations", params={"genre": "drama", "year": "199x"}).status_code == 400
    assert api.get("/api/recommendations", params={"genre": "drama", "type": "film"}).status_code == 400
    assert api.get("/api/recommendations", params={"genre": "drama", "sortBy": "rating"}).status_code == 400


def test_recommendations(api, fake_omdb):
    fake_omdb.add_title("tt5052448", "Get Out", "2017", language="English, Swahili")
    fake_omdb.add_title("tt6644200", "A Quiet Place", "2018", language="English, American Sign Language")
    params = {
        "genre": "Horror", "year": "2010-2019", "sortBy": "title",
        "languages": "swahili,german", "type": "movie",
    }
    response = api.get("/api/recommendations", params=params)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [movie["id"] for movie in body["results"]] == ["tt5052448"]
    assert body["genre"] == "horror"
    assert body["languages"] == ["swahili", "german"]
    assert body["yearRange"] == "2010-2019"
    assert body["sortBy"] == "title"

    cached = api.get("/api/recommendations", params=params).json()
    assert cached["cached"] is True
    assert cached["results"] == body["results"]


def test_recommendations_without_api_key(fake_omdb):
    settings = Settings(omdb_api_key=None)
    app = create_app(settings, omdb_transport=httpx.MockTransport(fake_omdb.handler))
    with TestClient(app) as client:
        response = client.get("/api/recommendations", params={"genre": "sci-fi"})
    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert "warning" in body
    assert body["results"][0]["title"] == "Interstellar"
    assert fake_omdb.requests == []


def test_search(api, fake_omdb):
    fake_omdb.add_search("dune", [
        omdb_title("tt1160419", "Dune", "2021"),
        omdb_title("tt15239678", "Dune: Part Two", "2024"),
    ])
    response = api.get("/api/search", params={"q": " Dune "})
    body = response.json()
    assert response.status_code == 200
    assert body["totalResults"] == 2
    assert body["page"] == 1
    assert body["results"][1]["title"] == "Dune: Part Two"
    assert "type" not in fake_omdb.requests[-1]

    assert api.get("/api/search", params={"q": "dune"}).json()["cached"] is True
    assert fake_omdb.count("s") == 1


def test_search_type_filter(api, fake_omdb):
    fake_omdb.add_search("office", [
        omdb_title("tt0386676", "The Office", "2005–2013", type_="series"),
        omdb_title("tt0151804", "Office Space", "1999"),
    ])
    body = api.get("/api/search", params={"q": "office", "type": "series"}).json()
    assert [movie["title"] for movie in body["results"]] == ["The Office"]
    assert fake_omdb.requests[-1]["type"] == "series"


def test_search_validation(api, fake_omdb):
    assert api.get("/api/search", params={"q": "a"}).status_code == 400
    assert api.get("/api/search").status_code == 400
    assert api.get("/api/search", params={"q": "dune", "year": "2010-2019"}).status_code == 400
    assert fake_omdb.requests == []


def test_search_not_found(api):
    response = api.get("/api/search", params={"q": "zzzzzz"})
    assert response.status_code == 404
    assert response.json()["message"] == "No movies found matching your search criteria"


def test_movie_details(api, fake_omdb):
    fake_omdb.add_title("tt5052448", "Get Out", "2017", genre="Horror, Mystery, Thriller")
    response = api.get("/api/movies/tt5052448")
    body = response.json()
    assert response.status_code == 200
    assert body["data"]["title"] == "Get Out"
    assert body["data"]["genre"] == ["Horror", "Mystery", "Thriller"]
    assert body["data"]["released"] is None
    assert fake_omdb.requests[-1]["plot"] == "full"

    assert api.get("/api/movies/tt5052448").json()["cached"] is True


def test_movie_details_invalid_id(api, fake_omdb):
    response = api.get("/api/movies/abc123")
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid IMDb ID format"
    assert fake_omdb.requests == []


def test_movie_details_not_found(api):
    response = api.get("/api/movies/tt0000001")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Movie not found"}


def test_similar(api, fake_omdb):
    fake_omdb.add_title("tt5052448", "Get Out", "2017", genre="Horror, Mystery, Thriller")
    fake_omdb.add_search("horror", [
        omdb_title("tt5052448", "Get Out", "2017"),
        omdb_title("tt6644200", "A Quiet Place", "2018"),
        omdb_title("tt7784604", "Hereditary", "2018", poster=None),
        omdb_title("tt1457767", "The Conjuring", "2013"),
    ])
    body = api.get("/api/similar", params={"id": "tt5052448", "limit": 5}).json()
    assert [movie["id"] for movie in body["similar"]] == ["tt6644200", "tt1457767"]
    assert body["count"] == 2
    assert body["originalMovie"] == {
        "id": "tt5052448", "title": "Get Out", "genres": ["Horror", "Mystery", "Thriller"],
    }

    limited = api.get("/api/similar", params={"id": "tt5052448", "limit": 1}).json()
    assert limited["count"] == 1


def test_similar_without_genres(api, fake_omdb):
    fake_omdb.add_title("tt0000002", "Untitled", "2020", genre="N/A")
    body = api.get("/api/similar", params={"id": "tt0000002"}).json()
    assert body["similar"] == []
    assert body["message"] == "No genres found for this movie"


def test_similar_validation(api):
    assert api.get("/api/similar").status_code == 400
    assert api.get("/api/similar", params={"id": "tt5052448", "limit": 51}).status_code == 400
    assert api.get("/api/similar", params={"id": "tt0000009"}).status_code == 404


def test_trending(api, fake_omdb):
    fake_omdb.add_search("oppenheimer", [
        omdb_title("tt15398776", "Oppenheimer", "2023"),
        omdb_title("tt0000010", "Oppenheimer Doc", "2023", poster=None),
    ])
    fake_omdb.add_search("barbie", [
        omdb_title("tt15398776", "Oppenheimer", "2023"),
        omdb_title("tt1517268", "Barbie", "2023"),
    ])
    fake_omdb.failing.add("killers of the flower moon")
    fake_omdb.add_search("the marvels", [omdb_title("tt10676048", "The Marvels", "2023")])

    body = api.get("/api/trending", params={"limit": 3}).json()
    assert [movie["title"] for movie in body["trending"]] == ["Oppenheimer", "Barbie", "The Marvels"]
    assert body["count"] == 3
    assert body["lastUpdated"]
    # stops once the limit is reached
    assert fake_omdb.requests[-1]["s"] == "The Marvels"


def test_trending_limit_validation(api):
    response = api.get("/api/trending", params={"limit": 0})
    assert response.status_code == 400
    assert response.json()["message"] == "Limit must be between 1 and 50"


def test_upstream_rate_limit():
    def handler(request):
        return httpx.Response(429, headers={"Retry-After": "30"})

    with _app_with_handler(handler) as client:
        response = client.get("/api/movies/tt5052448")
    assert response.status_code == 429
    assert response.json()["retryAfter"] == 30
    assert response.headers["retry-after"] == "30"


def test_omdb_request_limit_payload():
    def handler(request):
        return httpx.Response(401, json={"Response": "False", "Error": "Request limit reached!"})

    with _app_with_handler(handler) as client:
        assert client.get("/api/search", params={"q": "dune"}).status_code == 429


def test_upstream_unavailable():
    def handler(request):
        return httpx.Response(503, text="maintenance")

    with _app_with_handler(handler) as client:
        response = client.get("/api/movies/tt5052448")
    assert response.status_code == 503
    assert response.json()["success"] is False


def test_upstream_error_detail_only_in_development():
    def handler(request):
        return httpx.Response(401, json={"Response": "False", "Error": "Invalid API key!"})

    with _app_with_handler(handler, app_env="development") as client:
        body = client.get("/api/movies/tt5052448").json()
    assert body["error"] == "Invalid API key!"

    with _app_with_handler(handler) as client:
        response = client.get("/api/movies/tt5052448")
    assert response.status_code == 500
    assert "error" not in response.json()


def test_detail_without_api_key(fake_omdb):
    app = create_app(Settings(), omdb_transport=httpx.MockTransport(fake_omdb.handler))
    with TestClient(app) as client:
        response = client.get("/api/movies/tt5052448")
    assert response.status_code == 500
    assert "OMDB_API_KEY" in response.json()["message"]
    assert fake_omdb.requests == []


def test_crash_response_keeps_cors_header():
    def handler(request):
        raise RuntimeError("transport exploded")

    settings = Settings(omdb_api_key="test-key")
    app = create_app(settings, omdb_transport=httpx.MockTransport(handler))
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/movies/tt5052448")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "An unexpected error occurred"}
    assert response.headers["access-control-allow-origin"] == "*"
