"""
Year and language filters applied to candidate titles.
"""

from typing import Iterable, Optional

from cinesage.models import YearRange
from cinesage.utils import leading_int


def parse_year_range(value: Optional[str]) -> Optional[YearRange]:
    """
    Parse "2020" or "2020-2024" into a YearRange.

    Returns None for an empty value (no filter). A reversed range such as
    "2024-2020" is swapped. Raises ValueError on anything else.
    """
    if value is None or not value.strip():
        return None

    value = value.strip()
    if "-" in value:
        parts = value.split("-")
        if len(parts) != 2 or not parts[0].isdigit() or not parts[1].isdigit():
            raise ValueError(f"malformed year range {value!r}")
        start, end = int(parts[0]), int(parts[1])
        if start > end:
            start, end = end, start
        return YearRange(start, end)

    if not value.isdigit():
        raise ValueError(f"malformed year {value!r}")
    year = int(value)
    return YearRange(year, year)


def is_in_range(movie_year: Optional[str], year_range: Optional[YearRange]) -> bool:
    if year_range is None:
        return True
    year = leading_int(movie_year)
    if year is None:
        return False
    return year_range.start <= year <= year_range.end


def matches_language(language_field: Optional[str], selected: Iterable[str]) -> bool:
    selected = {lang.strip().lower() for lang in selected if lang.strip()}
    if not selected:
        return True
    if not language_field:
        return False
    movie_languages = {token.strip().lower() for token in language_field.split(",")}
    return bool(movie_languages & selected)


def matches_type(movie_type: Optional[str], requested: str) -> bool:
    return requested == "both" or (movie_type or "").lower() == requested
