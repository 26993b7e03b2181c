"""
Data models and types.

OMDb payloads use capitalized keys and the "N/A" sentinel for missing
values. They are normalized here and nowhere else.
"""

from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

MISSING = "N/A"


def _clean(value: Any) -> Optional[str]:
    if value is None or value == MISSING or value == "":
        return None
    return value


def _split_list(value: Any) -> tuple[str, ...]:
    value = _clean(value)
    if value is None:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


class YearRange(NamedTuple):
    start: int
    end: int


class Rating(NamedTuple):
    source: str
    value: str


@dataclass(frozen=True)
class MovieSummary:
    id: str
    title: str
    year: str
    type: str
    poster: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "imdbID": self.id,
            "title": self.title,
            "year": self.year,
            "type": self.type,
            "poster": self.poster,
        }


@dataclass(frozen=True)
class MovieDetail:
    id: str
    title: str
    year: str
    type: str
    poster: Optional[str]
    rated: Optional[str]
    released: Optional[str]
    runtime: Optional[str]
    genre: tuple[str, ...]
    director: Optional[str]
    writer: Optional[str]
    actors: tuple[str, ...]
    plot: Optional[str]
    language: Optional[str]
    country: Optional[str]
    awards: Optional[str]
    ratings: tuple[Rating, ...]
    metascore: Optional[str]
    imdb_rating: Optional[str]
    imdb_votes: Optional[str]
    dvd: Optional[str]
    box_office: Optional[str]
    production: Optional[str]
    website: Optional[str]

    def summary(self, poster: Optional[str] = None) -> MovieSummary:
        return MovieSummary(
            id=self.id,
            title=self.title,
            year=self.year,
            type=self.type,
            poster=poster or self.poster,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "year": self.year,
            "rated": self.rated,
            "released": self.released,
            "runtime": self.runtime,
            "genre": list(self.genre),
            "director": self.director,
            "writer": self.writer,
            "actors": list(self.actors),
            "plot": self.plot,
            "language": self.language,
            "country": self.country,
            "awards": self.awards,
            "poster": self.poster,
            "ratings": [{"source": r.source, "value": r.value} for r in self.ratings],
            "metascore": self.metascore,
            "imdbRating": self.imdb_rating,
            "imdbVotes": self.imdb_votes,
            "type": self.type,
            "dvd": self.dvd,
            "boxOffice": self.box_office,
            "production": self.production,
            "website": self.website,
        }


def summary_from_omdb(data: dict[str, Any]) -> MovieSummary:
    """Normalize one entry of an OMDb `Search` list."""
    return MovieSummary(
        id=data.get("imdbID", ""),
        title=data.get("Title") or "Unknown Title",
        year=data.get("Year") or "",
        type=data.get("Type") or "movie",
        poster=_clean(data.get("Poster")),
    )


def detail_from_omdb(data: dict[str, Any]) -> MovieDetail:
    """Normalize an OMDb title lookup (`?i=` query)."""
    return MovieDetail(
        id=data.get("imdbID", ""),
        title=data.get("Title") or "Unknown Title",
        year=data.get("Year") or "",
        type=data.get("Type") or "movie",
        poster=_clean(data.get("Poster")),
        rated=_clean(data.get("Rated")),
        released=_clean(data.get("Released")),
        runtime=_clean(data.get("Runtime")),
        genre=_split_list(data.get("Genre")),
        director=_clean(data.get("Director")),
        writer=_clean(data.get("Writer")),
        actors=_split_list(data.get("Actors")),
        plot=_clean(data.get("Plot")),
        language=_clean(data.get("Language")),
        country=_clean(data.get("Country")),
        awards=_clean(data.get("Awards")),
        ratings=tuple(
            Rating(source=r.get("Source", ""), value=r.get("Value", ""))
            for r in data.get("Ratings") or []
        ),
        metascore=_clean(data.get("Metascore")),
        imdb_rating=_clean(data.get("imdbRating")),
        imdb_votes=_clean(data.get("imdbVotes")),
        dvd=_clean(data.get("DVD")),
        box_office=_clean(data.get("BoxOffice")),
        production=_clean(data.get("Production")),
        website=_clean(data.get("Website")),
    )
