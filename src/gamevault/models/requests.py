# ===== IMPORTS & DEPENDENCIES =====
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, TypeAdapter, field_validator

from gamevault.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, MAX_BULK_IDS

# ===== TYPES & INTERFACES =====
# Strict types mirror JSON: "12" is not a number and 12.5 is not an id.
Limit = Annotated[StrictInt, Field(ge=1, le=MAX_PAGE_LIMIT)]
Offset = Annotated[StrictInt, Field(ge=0)]

DiscoverSort = Literal["total_rating desc", "first_release_date desc", "name asc"]
TaxonomyResource = Literal["genres", "platforms", "game_modes", "themes"]


class ModeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)


class SearchRequest(ModeRequest):
    mode: Literal["search"]
    term: StrictStr = Field(..., min_length=1, max_length=100)
    limit: Limit = DEFAULT_PAGE_LIMIT
    offset: Offset = 0


class TrendingRequest(ModeRequest):
    mode: Literal["trending"]
    limit: Limit = DEFAULT_PAGE_LIMIT
    offset: Offset = 0


class DiscoverFilters(ModeRequest):
    genres: Optional[List[StrictInt]] = None
    platforms: Optional[List[StrictInt]] = None
    year: Optional[StrictInt] = Field(default=None, ge=1, le=9998, description="Release year (UTC)")
    ratingMin: Optional[Union[StrictInt, StrictFloat]] = Field(default=None, ge=0, le=100)


class DiscoverRequest(ModeRequest):
    mode: Literal["discover"]
    filters: DiscoverFilters = Field(default_factory=DiscoverFilters)
    sort: Optional[DiscoverSort] = None
    limit: Limit = DEFAULT_PAGE_LIMIT
    offset: Offset = 0


class TaxonomyRequest(ModeRequest):
    mode: Literal["taxonomy"]
    resource: TaxonomyResource


class DetailRequest(ModeRequest):
    mode: Literal["detail"]
    id: StrictInt


class RecommendRequest(ModeRequest):
    mode: Literal["recommend"]
    id: StrictInt
    limit: Limit = DEFAULT_PAGE_LIMIT


class BulkRequest(ModeRequest):
    mode: Literal["bulk"]
    ids: List[StrictInt] = Field(..., min_length=1, max_length=MAX_BULK_IDS)


class MultiRequest(ModeRequest):
    mode: Literal["multi"]
    body: StrictStr = Field(..., min_length=1)

    @field_validator('body')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('body must not be blank')
        return v


QueryRequest = Annotated[
    Union[
        SearchRequest,
        TrendingRequest,
        DiscoverRequest,
        TaxonomyRequest,
        DetailRequest,
        RecommendRequest,
        BulkRequest,
        MultiRequest,
    ],
    Field(discriminator="mode"),
]

query_request_adapter = TypeAdapter(QueryRequest)
