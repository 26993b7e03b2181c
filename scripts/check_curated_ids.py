"""
Check the curated IMDb IDs against OMDb.

Reports IDs that OMDb does not know, that have no poster or whose title
type is not a movie. Requires OMDB_API_KEY:
    OMDB_API_KEY=... python -m scripts.check_curated_ids --genre horror
"""

import argparse
import asyncio
import os

from cinesage.catalog import CURATED_IDS
from cinesage.errors import ApiError
from cinesage.logger import get_logger
from cinesage.upstream.omdb import OmdbClient

logger = get_logger("scripts.check_curated_ids")


async def check_genre(omdb: OmdbClient, genre: str) -> int:
    problems = 0
    for imdb_id in CURATED_IDS[genre]:
        try:
            movie = await omdb.get_title(imdb_id, plot="short")
        except ApiError as exc:
            logger.error(f"{genre}: {imdb_id} failed: {exc.message} {exc.detail or ''}")
            problems += 1
            continue
        if movie.poster is None:
            logger.warning(f"{genre}: {imdb_id} ({movie.title}) has no poster")
            problems += 1
        elif movie.type != "movie":
            logger.warning(f"{genre}: {imdb_id} ({movie.title}) is a {movie.type}")
            problems += 1
        else:
            logger.debug(f"{genre}: {imdb_id} ok ({movie.title}, {movie.year})")
    return problems


async def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--genre", action="append", choices=sorted(CURATED_IDS))
    args = parser.parse_args()

    omdb = OmdbClient(os.environ["OMDB_API_KEY"])
    genres = args.genre or sorted(CURATED_IDS)
    try:
        problems = 0
        for genre in genres:
            problems += await check_genre(omdb, genre)
    finally:
        await omdb.aclose()
    logger.info(f"checked {len(genres)} genres, found {problems} problems")


if __name__ == "__main__":
    asyncio.run(main())
