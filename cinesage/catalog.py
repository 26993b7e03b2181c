"""
Static title data: curated IMDb IDs per genre, local fallback titles and the
keywords used to build the trending list.

Some IDs appear under several genres on purpose (crossover titles).
"""

from dataclasses import dataclass

from cinesage.models import MovieSummary


@dataclass(frozen=True)
class GenreCatalogEntry:
    curated_ids: tuple[str, ...]
    fallback: tuple[MovieSummary, ...] = ()


def _movie(title: str, year: str, imdb_id: str, type_: str = "movie") -> MovieSummary:
    return MovieSummary(id=imdb_id, title=title, year=year, type=type_)


CURATED_IDS: dict[str, tuple[str, ...]] = {
    "action": (
        "tt0468569", "tt1392190", "tt2911666", "tt4912910", "tt1375666",
        "tt0848228", "tt1825683", "tt0133093", "tt0172495", "tt0095016",
    ),
    "adventure": (
        "tt0120737", "tt0167260", "tt0082971", "tt0816692", "tt0076759",
        "tt0325980", "tt0107290", "tt0088763", "tt1392190",
    ),
    "animation": (
        "tt0245429", "tt0114709", "tt4633694", "tt0910970", "tt2380307",
        "tt0110357", "tt2096673", "tt0317705", "tt0198781", "tt0266543",
    ),
    "biography": (
        "tt15398776", "tt0108052", "tt1285016", "tt0993846", "tt2084970",
        "tt0099685", "tt0268978", "tt2980516", "tt1727824", "tt0081398",
    ),
    "comedy": (
        "tt1119646", "tt1411697", "tt1951261", "tt0829482", "tt1478338",
        "tt0405422", "tt0478311", "tt1245492", "tt2278388", "tt0357413",
    ),
    "crime": (
        "tt0068646", "tt0110912", "tt0071562", "tt0407887", "tt0114369",
        "tt0102926", "tt0099685", "tt0105236", "tt0477348", "tt0114814",
    ),
    "documentary": (
        "tt7775622", "tt2125608", "tt0310793", "tt0390521", "tt0497116",
        "tt1155592", "tt1772925", "tt6333060", "tt7681902", "tt2545118",
    ),
    "drama": (
        "tt0111161", "tt0109830", "tt0120689", "tt0108052", "tt0068646",
        "tt0110912", "tt0137523", "tt0099685", "tt0169547", "tt0120815",
    ),
    "family": (
        "tt0241527", "tt0083866", "tt1201607", "tt2294629", "tt0099785",
        "tt4468740", "tt0097757", "tt0114709", "tt0103639", "tt0101414",
    ),
    "fantasy": (
        "tt0120737", "tt0167261", "tt0167260", "tt0241527", "tt0457430",
        "tt0245429", "tt0903624", "tt0093779", "tt1201607",
    ),
    "film-noir": (
        "tt0033870", "tt0036775", "tt0043014", "tt0041959", "tt0038355",
        "tt0040506", "tt0037008", "tt0038787", "tt0042208",
    ),
    "history": (
        "tt0120815", "tt0108052", "tt0112573", "tt0172495", "tt5013056",
        "tt2024544", "tt0056172", "tt0443272", "tt15398776",
    ),
    "horror": (
        "tt5052448", "tt6644200", "tt7784604", "tt1457767", "tt3235888",
        "tt2321549", "tt1922777", "tt4263482", "tt0081505", "tt0078748",
    ),
    "music": (
        "tt2582802", "tt1727824", "tt1517451", "tt0358273", "tt0350258",
        "tt0088258", "tt3544112", "tt0181875", "tt0907657",
    ),
    "musical": (
        "tt3783958", "tt0059742", "tt1485796", "tt0055614", "tt0045152",
        "tt0299658", "tt0203009", "tt0795421",
    ),
    "mystery": (
        "tt0209144", "tt1130884", "tt0482571", "tt8946378", "tt2267998",
        "tt0114369", "tt1392214", "tt0052357", "tt0047396", "tt1375666",
    ),
    "romance": (
        "tt3783958", "tt0332280", "tt1022603", "tt0338013", "tt0112471",
        "tt2194499", "tt2582846", "tt3104988", "tt0120338", "tt0125439",
    ),
    "sci-fi": (
        "tt0816692", "tt1856101", "tt2543164", "tt0470752", "tt3659388",
        "tt1454468", "tt1798709", "tt1631867", "tt0133093", "tt0083658",
    ),
    "sport": (
        "tt0075148", "tt1210166", "tt0081398", "tt1979320", "tt0405159",
        "tt0210945", "tt3076658", "tt1291584", "tt0116695",
    ),
    "thriller": (
        "tt0102926", "tt0114369", "tt1392214", "tt6751668", "tt0054215",
        "tt2267998", "tt0209144", "tt0073195", "tt0167404", "tt5052448",
    ),
    "war": (
        "tt0120815", "tt5013056", "tt8579674", "tt0078788", "tt0093058",
        "tt0361748", "tt0050212", "tt0077416", "tt0091763", "tt2119532",
    ),
    "western": (
        "tt0060196", "tt1853728", "tt0105695", "tt0064116", "tt0381849",
        "tt1403865", "tt0099348", "tt0049730", "tt3460252",
    ),
}

FALLBACK_TITLES: dict[str, tuple[MovieSummary, ...]] = {
    "action": (
        _movie("The Dark Knight", "2008", "tt0468569"),
        _movie("Mad Max: Fury Road", "2015", "tt1392190"),
        _movie("John Wick", "2014", "tt2911666"),
        _movie("Mission: Impossible - Fallout", "2018", "tt4912910"),
        _movie("Inception", "2010", "tt1375666"),
        _movie("The Avengers", "2012", "tt0848228"),
        _movie("Black Panther", "2018", "tt1825683"),
        _movie("The Matrix", "1999", "tt0133093"),
        _movie("Gladiator", "2000", "tt0172495"),
        _movie("Die Hard", "1988", "tt0095016"),
        _movie("Top Gun: Maverick", "2022", "tt1745960"),
        _movie("Daredevil", "2015–2018", "tt3322312", "series"),
        _movie("The Boys", "2019–", "tt1190634", "series"),
    ),
    "comedy": (
        _movie("The Hangover", "2009", "tt1119646"),
        _movie("The Hangover Part II", "2011", "tt1411697"),
        _movie("The Hangover Part III", "2013", "tt1951261"),
        _movie("Superbad", "2007", "tt0829482"),
        _movie("Bridesmaids", "2011", "tt1478338"),
        _movie("The 40-Year-Old Virgin", "2005", "tt0405422"),
        _movie("Knocked Up", "2007", "tt0478311"),
        _movie("This Is the End", "2013", "tt1245492"),
        _movie("The Grand Budapest Hotel", "2014", "tt2278388"),
        _movie("Anchorman: The Legend of Ron Burgundy", "2004", "tt0357413"),
        _movie("The Office", "2005–2013", "tt0386676", "series"),
        _movie("Friends", "1994–2004", "tt0108778", "series"),
        _movie("Brooklyn Nine-Nine", "2013–2021", "tt2467372", "series"),
    ),
    "drama": (
        _movie("The Shawshank Redemption", "1994", "tt0111161"),
        _movie("Forrest Gump", "1994", "tt0109830"),
        _movie("The Green Mile", "1999", "tt0120689"),
        _movie("Schindler's List", "1993", "tt0108052"),
        _movie("The Godfather", "1972", "tt0068646"),
        _movie("Fight Club", "1999", "tt0137523"),
        _movie("Goodfellas", "1990", "tt0099685"),
        _movie("Oppenheimer", "2023", "tt15398776"),
        _movie("Breaking Bad", "2008–2013", "tt0903747", "series"),
        _movie("The Crown", "2016–2023", "tt4786824", "series"),
        _movie("The Sopranos", "1999–2007", "tt0141842", "series"),
    ),
    "horror": (
        _movie("Get Out", "2017", "tt5052448"),
        _movie("A Quiet Place", "2018", "tt6644200"),
        _movie("Hereditary", "2018", "tt7784604"),
        _movie("The Conjuring", "2013", "tt1457767"),
        _movie("It Follows", "2014", "tt3235888"),
        _movie("The Babadook", "2014", "tt2321549"),
        _movie("Sinister", "2012", "tt1922777"),
        _movie("The Witch", "2015", "tt4263482"),
        _movie("The Shining", "1980", "tt0081505"),
        _movie("The Haunting of Hill House", "2018", "tt6763664", "series"),
    ),
    "romance": (
        _movie("La La Land", "2016", "tt3783958"),
        _movie("The Notebook", "2004", "tt0332280"),
        _movie("500 Days of Summer", "2009", "tt1022603"),
        _movie("Eternal Sunshine of the Spotless Mind", "2004", "tt0338013"),
        _movie("Before Sunrise", "1995", "tt0112471"),
        _movie("About Time", "2013", "tt2194499"),
        _movie("The Fault in Our Stars", "2014", "tt2582846"),
        _movie("Crazy Rich Asians", "2018", "tt3104988"),
        _movie("Titanic", "1997", "tt0120338"),
        _movie("Bridgerton", "2020–", "tt8740790", "series"),
    ),
    "sci-fi": (
        _movie("Interstellar", "2014", "tt0816692"),
        _movie("Blade Runner 2049", "2017", "tt1856101"),
        _movie("Arrival", "2016", "tt2543164"),
        _movie("Ex Machina", "2014", "tt0470752"),
        _movie("The Martian", "2015", "tt3659388"),
        _movie("Gravity", "2013", "tt1454468"),
        _movie("Her", "2013", "tt1798709"),
        _movie("Edge of Tomorrow", "2014", "tt1631867"),
        _movie("Dune", "2021", "tt1160419"),
        _movie("Dune: Part Two", "2024", "tt15239678"),
        _movie("Stranger Things", "2016–2025", "tt4574334", "series"),
        _movie("Black Mirror", "2011–", "tt2085059", "series"),
    ),
    "animation": (
        _movie("Spirited Away", "2001", "tt0245429"),
        _movie("Toy Story", "1995", "tt0114709"),
        _movie("Spider-Man: Into the Spider-Verse", "2018", "tt4633694"),
        _movie("WALL·E", "2008", "tt0910970"),
        _movie("Coco", "2017", "tt2380307"),
        _movie("The Lion King", "1994", "tt0110357"),
        _movie("Inside Out", "2015", "tt2096673"),
        _movie("Arcane", "2021–2024", "tt11126994", "series"),
    ),
    "thriller": (
        _movie("The Silence of the Lambs", "1991", "tt0102926"),
        _movie("Se7en", "1995", "tt0114369"),
        _movie("Prisoners", "2013", "tt1392214"),
        _movie("Parasite", "2019", "tt6751668"),
        _movie("Psycho", "1960", "tt0054215"),
        _movie("Gone Girl", "2014", "tt2267998"),
        _movie("Memento", "2000", "tt0209144"),
        _movie("Mindhunter", "2017–2019", "tt5290382", "series"),
    ),
    "crime": (
        _movie("The Godfather", "1972", "tt0068646"),
        _movie("Pulp Fiction", "1994", "tt0110912"),
        _movie("The Departed", "2006", "tt0407887"),
        _movie("No Country for Old Men", "2007", "tt0477348"),
        _movie("The Usual Suspects", "1995", "tt0114814"),
        _movie("Breaking Bad", "2008–2013", "tt0903747", "series"),
        _movie("Sherlock", "2010–2017", "tt1475582", "series"),
    ),
}

DEFAULT_FALLBACK: tuple[MovieSummary, ...] = (
    _movie("The Shawshank Redemption", "1994", "tt0111161"),
    _movie("The Dark Knight", "2008", "tt0468569"),
    _movie("Inception", "2010", "tt1375666"),
    _movie("Pulp Fiction", "1994", "tt0110912"),
    _movie("Forrest Gump", "1994", "tt0109830"),
    _movie("Interstellar", "2014", "tt0816692"),
    _movie("Spirited Away", "2001", "tt0245429"),
    _movie("Parasite", "2019", "tt6751668"),
    _movie("Oppenheimer", "2023", "tt15398776"),
    _movie("Dune: Part Two", "2024", "tt15239678"),
    _movie("Breaking Bad", "2008–2013", "tt0903747", "series"),
    _movie("Game of Thrones", "2011–2019", "tt0944947", "series"),
)

GENRE_CATALOG: dict[str, GenreCatalogEntry] = {
    genre: GenreCatalogEntry(curated_ids=ids, fallback=FALLBACK_TITLES.get(genre, ()))
    for genre, ids in CURATED_IDS.items()
}

TRENDING_KEYWORDS: tuple[str, ...] = (
    "Oppenheimer", "Barbie", "Killers of the Flower Moon", "Dune Part Two",
    "The Marvels", "Elemental", "Insidious", "The Nun II",
    "Asteroid City", "Dungeons & Dragons", "Indiana Jones",
    "Fast X", "Mission Impossible", "Aquaman", "The Flash",
)


def curated_ids(genre: str) -> tuple[str, ...]:
    entry = GENRE_CATALOG.get(genre)
    return entry.curated_ids if entry is not None else ()


def fallback_titles(genre: str) -> tuple[MovieSummary, ...]:
    entry = GENRE_CATALOG.get(genre)
    if entry is None or not entry.fallback:
        return DEFAULT_FALLBACK
    return entry.fallback
