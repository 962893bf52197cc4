# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as SchemaError

from gamevault.core.cache import ResponseCache
from gamevault.core.igdb_client import IGDBClient
from gamevault.enrichment.normalizer import (
    normalize_detail, normalize_summaries, normalize_taxonomy, parse_records
)
from gamevault.models.game import GameDetail, PopularityPrimitive, RecommendSource
from gamevault.models.requests import DiscoverFilters
from gamevault.sources import queries
from gamevault.utils.game_utils import clean_ids, reorder_by_ids

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

GameList = List[Dict[str, Any]]


# ===== CORE BUSINESS LOGIC =====
class IGDBCatalog:
    """Builds IGDB queries for each request mode, runs them through the client and normalizes the results."""

    def __init__(self, client: IGDBClient, trending_cache: ResponseCache):
        self._client = client
        self._trending_cache = trending_cache

    async def _games(self, query: str) -> GameList:
        return normalize_summaries(await self._client.send(queries.GAMES, query))

    async def search(self, term: str, limit: int, offset: int) -> GameList:
        logger.info(f"[{self.__class__.__name__}] search term='{term[:50]}' limit={limit} offset={offset}")
        return await self._games(queries.build_search_query(term, limit, offset))

    async def trending(self, limit: int, offset: int) -> GameList:
        cache_key = f"trending:{limit}:{offset}"
        cached = self._trending_cache.get(cache_key)
        if cached is not None:
            logger.info(f"✅ [{self.__class__.__name__}] Serving trending from cache: {cache_key}")
            return cached

        games = await self._games(queries.build_trending_query(limit, offset))
        self._trending_cache.set(cache_key, games)
        return games

    async def discover(self, filters: DiscoverFilters, sort: Optional[str], limit: int, offset: int) -> GameList:
        return await self._games(queries.build_discover_query(filters, sort, limit, offset))

    async def taxonomy(self, resource: str) -> GameList:
        raw = await self._client.send(resource, queries.build_taxonomy_query(resource))
        return normalize_taxonomy(raw)

    async def detail(self, game_id: int) -> Optional[Dict[str, Any]]:
        raw = await self._client.send(queries.GAMES, queries.build_detail_query(game_id))
        games = parse_records(raw, GameDetail)
        if not games:
            logger.info(f"[{self.__class__.__name__}] Game {game_id} not found.")
            return None
        return normalize_detail(games[0])

    async def bulk(self, ids: List[Any]) -> GameList:
        """Fetches many games in one call. Returns `[]` without calling IGDB when no usable id remains."""
        clean = clean_ids(ids)
        if not clean:
            logger.debug(f"[{self.__class__.__name__}] Bulk request had no valid ids. Skipping IGDB call.")
            return []
        return await self._games(queries.build_bulk_query(clean))

    async def multi(self, body: str) -> Any:
        # The caller owns the multiquery syntax; the body is forwarded untouched.
        return await self._client.send(queries.MULTIQUERY, body)

    async def recommend(self, game_id: int, limit: int) -> Optional[GameList]:
        """
        Recommends games for `game_id`, trying in order:

        1. the game's own `similar_games` list,
        2. the highest rated games sharing at least one of its genres,
        3. the global popularity feed.

        Returns None when the source game does not exist.
        """
        raw = await self._client.send(queries.GAMES, queries.build_recommend_source_query(game_id))
        sources = parse_records(raw, RecommendSource)
        if not sources:
            logger.info(f"[{self.__class__.__name__}] Recommendation source {game_id} not found.")
            return None
        source = sources[0]

        similar_ids = [i for i in clean_ids(source.similar_games or []) if i != game_id][:limit]
        if similar_ids:
            logger.info(f"[{self.__class__.__name__}] Recommending {game_id} from {len(similar_ids)} similar games.")
            return reorder_by_ids(await self.bulk(similar_ids), similar_ids)

        genre_ids = clean_ids(source.genres or [])
        if genre_ids:
            logger.info(f"[{self.__class__.__name__}] Recommending {game_id} by genres {genre_ids}.")
            games = await self._games(queries.build_genre_recommend_query(game_id, genre_ids, limit))
            # IGDB sorts on a single key; break rating ties by vote count.
            games.sort(key=lambda g: (g.get('total_rating') or 0, g.get('total_rating_count') or 0), reverse=True)
            return games

        logger.info(f"[{self.__class__.__name__}] Recommending {game_id} from the popularity feed.")
        return await self._popular(game_id, limit)

    async def _popular(self, exclude_id: int, limit: int) -> GameList:
        raw = await self._client.send(
            queries.POPULARITY_PRIMITIVES, queries.build_popularity_query(limit + 1)
        )
        primitives = self._parse_primitives(raw)
        candidate_ids = [i for i in clean_ids(p.game_id for p in primitives) if i != exclude_id][:limit]
        if not candidate_ids:
            return []
        return reorder_by_ids(await self.bulk(candidate_ids), candidate_ids)

    def _parse_primitives(self, raw: Any) -> List[PopularityPrimitive]:
        if not isinstance(raw, list):
            return []
        primitives = []
        for item in raw:
            try:
                primitives.append(PopularityPrimitive.model_validate(item))
            except SchemaError:
                logger.warning(f"⚠️ [{self.__class__.__name__}] Skipping malformed popularity primitive: {item!r:.100}")
        return primitives
