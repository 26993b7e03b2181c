"""
Request parameter checks shared by the API routes.

Each check raises InvalidInput and runs before any upstream call.
"""

import re
from typing import Optional

from cinesage.errors import InvalidInput
from cinesage.filters import parse_year_range

VALID_GENRES = (
    "action", "adventure", "animation", "biography", "comedy", "crime", "documentary",
    "drama", "family", "fantasy", "film-noir", "history", "horror", "music", "musical",
    "mystery", "romance", "sci-fi", "sport", "thriller", "war", "western",
)
VALID_TYPES = ("movie", "series", "episode", "both")
VALID_SORTS = ("relevance", "year", "title")

MIN_QUERY_LENGTH = 2
MAX_LIMIT = 50

_SINGLE_YEAR = re.compile(r"^\d{4}$")
_YEAR_OR_RANGE = re.compile(r"^[\d-]+$")
_IMDB_ID = re.compile(r"^tt\d+$")


def validate_genre(genre: Optional[str]) -> str:
    if not genre or not genre.strip():
        raise InvalidInput("Genre is required")
    genre = genre.strip().lower()
    if genre not in VALID_GENRES:
        raise InvalidInput(f"Invalid genre. Must be one of: {', '.join(VALID_GENRES)}")
    return genre


def validate_year(year: Optional[str], allow_range: bool = False) -> Optional[str]:
    if year is None or year == "":
        return None
    year = year.strip()
    if not allow_range:
        if not _SINGLE_YEAR.match(year):
            raise InvalidInput("Year must be a valid 4-digit year")
        return year

    if not _YEAR_OR_RANGE.match(year):
        raise InvalidInput("Year must be a 4-digit year or a range like 2010-2019")
    try:
        parse_year_range(year)
    except ValueError:
        raise InvalidInput("Year must be a 4-digit year or a range like 2010-2019")
    return year


def validate_page(page: int) -> int:
    if page < 1:
        raise InvalidInput("Page number must be greater than 0")
    return page


def validate_type(type_: Optional[str], default: str = "movie") -> str:
    if type_ is None or type_ == "":
        return default
    type_ = type_.strip().lower()
    if type_ not in VALID_TYPES:
        raise InvalidInput(f"Invalid type. Must be one of: {', '.join(VALID_TYPES)}")
    return type_


def validate_sort_by(sort_by: Optional[str]) -> str:
    if sort_by is None or sort_by == "":
        return "relevance"
    if sort_by not in VALID_SORTS:
        raise InvalidInput(f"Invalid sortBy. Must be one of: {', '.join(VALID_SORTS)}")
    return sort_by


def validate_query(query: Optional[str]) -> str:
    query = (query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        raise InvalidInput("Search query must be at least 2 characters long")
    return query


def validate_limit(limit: int) -> int:
    if limit < 1 or limit > MAX_LIMIT:
        raise InvalidInput(f"Limit must be between 1 and {MAX_LIMIT}")
    return limit


def validate_imdb_id(movie_id: Optional[str]) -> str:
    if not movie_id:
        raise InvalidInput("Movie ID is required")
    if not _IMDB_ID.match(movie_id):
        raise InvalidInput("Invalid IMDb ID format")
    return movie_id


def parse_languages(languages: Optional[str]) -> tuple[str, ...]:
    if not languages:
        return ()
    return tuple(lang.strip().lower() for lang in languages.split(",") if lang.strip())
