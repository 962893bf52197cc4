# ===== IMPORTS & DEPENDENCIES =====
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, Optional, Tuple, Union

from gamevault.config import POPULARITY_TYPE
from gamevault.models.requests import DiscoverFilters

# ===== CONFIGURATION & CONSTANTS =====
LIST_FIELDS = "id,name,first_release_date,cover.url,platforms.abbreviation,genres.name,total_rating,total_rating_count"
BULK_FIELDS = "id,name,first_release_date,cover.url,platforms.abbreviation,genres.name,aggregated_rating,total_rating,total_rating_count"
DETAIL_FIELDS = ",".join([
    "id", "name", "summary", "storyline", "first_release_date",
    "cover.url",
    "screenshots.url",
    "videos.video_id", "videos.name",
    "websites.url", "websites.category",
    "genres.name",
    "platforms.name", "platforms.abbreviation", "platforms.platform_logo.url",
    "game_modes.name",
    "themes.name",
    "involved_companies.company.name", "involved_companies.developer", "involved_companies.publisher",
    "similar_games",
    "aggregated_rating", "aggregated_rating_count", "total_rating", "total_rating_count",
])
RECOMMEND_SOURCE_FIELDS = "id,genres,similar_games"

DEFAULT_DISCOVER_SORT = "total_rating desc"

TAXONOMY_QUERIES: Dict[str, str] = {
    "genres": "fields id,name; sort name asc; limit 500;",
    "platforms": "fields id,name,abbreviation; sort name asc; limit 500;",
    "game_modes": "fields id,name; sort name asc; limit 100;",
    "themes": "fields id,name; sort name asc; limit 100;",
}

GAMES = "games"
POPULARITY_PRIMITIVES = "popularity_primitives"
MULTIQUERY = "multiquery"


# ===== UTILITY FUNCTIONS =====

def escape_term(term: str) -> str:
    """Escapes a free-text term for use inside an IGDB `search "..."` clause."""
    return term.replace('\\', '\\\\').replace('"', '\\"')


def year_range_unix(year: int) -> Tuple[int, int]:
    """UTC-midnight boundaries of `[year, year + 1)` as unix seconds."""
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    return int(start.timestamp()), int(end.timestamp())


def _decimal(value: Union[int, float]) -> str:
    """Plain decimal notation with no exponent and no rounding, e.g. 1e-05 -> 0.00001."""
    return format(Decimal(str(value)).normalize(), 'f')


def _id_list(ids: Iterable[int]) -> str:
    return ",".join(str(i) for i in ids)


# ===== QUERY BUILDERS =====

def build_search_query(term: str, limit: int, offset: int) -> str:
    return (
        f'search "{escape_term(term)}"; '
        f'fields {LIST_FIELDS}; '
        'where cover != null; '
        f'limit {limit}; offset {offset};'
    )


def build_trending_query(limit: int, offset: int) -> str:
    return (
        f'fields {LIST_FIELDS}; '
        'where cover != null & total_rating_count != null; '
        'sort total_rating_count desc; '
        f'limit {limit}; offset {offset};'
    )


def build_discover_query(filters: DiscoverFilters, sort: Optional[str], limit: int, offset: int) -> str:
    clauses = ["cover != null"]
    if filters.genres:
        clauses.append(f"genres = ({_id_list(filters.genres)})")
    if filters.platforms:
        clauses.append(f"platforms = ({_id_list(filters.platforms)})")
    if filters.year is not None:
        start, end = year_range_unix(filters.year)
        clauses.append(f"first_release_date >= {start} & first_release_date < {end}")
    if filters.ratingMin is not None:
        clauses.append(f"total_rating >= {_decimal(filters.ratingMin)}")

    return (
        f'fields {LIST_FIELDS}; '
        f'where {" & ".join(clauses)}; '
        f'sort {sort or DEFAULT_DISCOVER_SORT}; '
        f'limit {limit}; offset {offset};'
    )


def build_taxonomy_query(resource: str) -> str:
    return TAXONOMY_QUERIES[resource]


def build_detail_query(game_id: int) -> str:
    return f'fields {DETAIL_FIELDS}; where id = {game_id}; limit 1;'


def build_bulk_query(ids: Iterable[int]) -> str:
    ids = list(ids)
    return f'fields {BULK_FIELDS}; where id = ({_id_list(ids)}); limit {len(ids)};'


def build_recommend_source_query(game_id: int) -> str:
    return f'fields {RECOMMEND_SOURCE_FIELDS}; where id = {game_id}; limit 1;'


def build_genre_recommend_query(source_id: int, genre_ids: Iterable[int], limit: int) -> str:
    return (
        f'fields {LIST_FIELDS}; '
        f'where genres = ({_id_list(genre_ids)}) & id != {source_id} & cover != null; '
        'sort total_rating desc; '
        f'limit {limit};'
    )


def build_popularity_query(limit: int, popularity_type: int = POPULARITY_TYPE) -> str:
    return (
        'fields game_id,value,popularity_type; '
        f'where popularity_type = {popularity_type}; '
        'sort value desc; '
        f'limit {limit};'
    )
