# ===== TYPES & INTERFACES =====

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class IGDBEntity(BaseModel):
    """
    Base for IGDB records. Only the fields the gateway reshapes are declared;
    every other upstream field is kept as-is (`extra='allow'`) and returned to
    the client untouched.
    """
    model_config = ConfigDict(extra='allow')

    id: int


class ImageRef(BaseModel):
    """A nested image object such as `cover`, `screenshots[]` or `platform_logo`."""
    model_config = ConfigDict(extra='allow')

    id: Optional[int] = None
    url: Optional[str] = None


class Platform(IGDBEntity):
    platform_logo: Optional[ImageRef] = None


class GameSummary(IGDBEntity):
    """
    A game as returned by list queries (search, trending, discover, bulk, recommend).

    Attributes:
        id (int): The IGDB game id.
        cover (Optional[ImageRef]): Cover art; `url` is rewritten to the list size.
    """
    cover: Optional[ImageRef] = None


class GameDetail(GameSummary):
    """
    A game as returned by the detail query.

    Attributes:
        screenshots (List[ImageRef]): Rewritten to the 1080p size.
        platforms (List[Platform]): Platform logos are rewritten to the logo size.
        similar_games (list): Normalized to a deduplicated list of positive ids.
    """
    screenshots: Optional[List[ImageRef]] = None
    platforms: Optional[List[Platform]] = None
    similar_games: Optional[list] = None


class TaxonomyEntry(IGDBEntity):
    """A genre, platform, game mode or theme."""
    name: Optional[str] = None


class RecommendSource(IGDBEntity):
    """The minimal view of a game used to choose a recommendation strategy."""
    genres: Optional[List[int]] = None
    similar_games: Optional[list] = None


class PopularityPrimitive(BaseModel):
    model_config = ConfigDict(extra='allow')

    game_id: int
    value: Optional[float] = None
