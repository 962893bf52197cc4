# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as SchemaError

from gamevault.config import LIST_IMAGE_SIZE, DETAIL_COVER_SIZE, SCREENSHOT_SIZE, PLATFORM_LOGO_SIZE
from gamevault.models.game import GameDetail, GameSummary, IGDBEntity, ImageRef, TaxonomyEntry
from gamevault.utils.game_utils import clean_ids
from gamevault.utils.url_utils import format_igdb_image

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=IGDBEntity)


# ===== CORE BUSINESS LOGIC =====

def parse_records(raw: Any, schema: Type[EntityT]) -> List[EntityT]:
    """
    Validates an IGDB response array against `schema`. Records that do not fit
    (no integer id, wrong nested shapes) are dropped with a warning rather than
    passed through.
    """
    if not isinstance(raw, list):
        logger.warning(f"[normalizer] Expected a list from IGDB, got {type(raw).__name__}. Treating as empty.")
        return []

    records: List[EntityT] = []
    for item in raw:
        try:
            records.append(schema.model_validate(item))
        except SchemaError as e:
            item_id = item.get('id', 'N/A') if isinstance(item, dict) else 'N/A'
            logger.warning(f"⚠️ [normalizer] Skipping {schema.__name__} record id={item_id}: {e.error_count()} schema error(s).")
    return records


def _dump(model: BaseModel) -> Dict[str, Any]:
    """Serializes a record with its upstream extras, leaving out declared fields IGDB did not send."""
    data = model.model_dump()
    for name in type(model).model_fields:
        if name not in model.model_fields_set:
            data.pop(name, None)
    return data


def _image(ref: Optional[ImageRef], size: str) -> Optional[Dict[str, Any]]:
    if ref is None:
        return None
    data = _dump(ref)
    data['url'] = format_igdb_image(ref.url, size)
    return data


def normalize_summary(game: GameSummary, size: str = LIST_IMAGE_SIZE) -> Dict[str, Any]:
    """List-view shape: every upstream field, with `cover.url` at list size (cover is null when absent)."""
    data = _dump(game)
    data['cover'] = _image(game.cover, size)
    return data


def normalize_summaries(raw: Any, size: str = LIST_IMAGE_SIZE) -> List[Dict[str, Any]]:
    return [normalize_summary(game, size) for game in parse_records(raw, GameSummary)]


def normalize_detail(game: GameDetail) -> Dict[str, Any]:
    """Detail shape: high-resolution cover and screenshots, platform logos, clean `similar_games` ids."""
    data = _dump(game)
    data['cover'] = _image(game.cover, DETAIL_COVER_SIZE)
    data['screenshots'] = [_image(shot, SCREENSHOT_SIZE) for shot in game.screenshots or []]
    if game.platforms is not None:
        platforms = []
        for platform in game.platforms:
            platform_data = _dump(platform)
            if platform.platform_logo is not None:
                platform_data['platform_logo'] = _image(platform.platform_logo, PLATFORM_LOGO_SIZE)
            platforms.append(platform_data)
        data['platforms'] = platforms
    data['similar_games'] = clean_ids(game.similar_games or [])
    return data


def normalize_taxonomy(raw: Any) -> List[Dict[str, Any]]:
    return [_dump(entry) for entry in parse_records(raw, TaxonomyEntry)]
