# ===== IMPORTS & DEPENDENCIES =====
import logging
from dataclasses import dataclass, field
from typing import Any, Dict

from pydantic import ValidationError as SchemaError

from gamevault.config import CACHE_CONTROL_BY_MODE, NO_STORE
from gamevault.core.errors import GatewayError, UpstreamError, ValidationError
from gamevault.models.requests import (
    BulkRequest, DetailRequest, DiscoverRequest, MultiRequest, QueryRequest, RecommendRequest,
    SearchRequest, TaxonomyRequest, TrendingRequest, query_request_adapter,
)
from gamevault.sources.igdb_catalog import IGDBCatalog

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


# ===== TYPES & INTERFACES =====
@dataclass
class GatewayResponse:
    status: int
    body: Any
    headers: Dict[str, str] = field(default_factory=dict)


def error_response(status: int, message: str) -> GatewayResponse:
    return GatewayResponse(status, {"error": message}, {"Cache-Control": NO_STORE})


def format_validation_error(error: SchemaError) -> str:
    """Flattens pydantic errors into one readable line, e.g. `term: String should have at least 1 character`."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get('loc', ()) if part is not None)
        parts.append(f"{location}: {err.get('msg')}" if location else err.get('msg', 'Invalid value'))
    return "; ".join(parts) or "Bad request"


# ===== CORE BUSINESS LOGIC =====
class QueryRouter:
    """
    Validates a tagged request and dispatches it to the catalog.

    This is the only place where failures become responses: validation errors
    are 400, missing games on detail/recommend are a `null` body with 404,
    gateway errors keep their status and message (upstream bodies are not
    exposed), anything else is a generic 500.
    """

    def __init__(self, catalog: IGDBCatalog):
        self._catalog = catalog

    def validate(self, payload: Any) -> QueryRequest:
        try:
            return query_request_adapter.validate_python(payload)
        except SchemaError as e:
            raise ValidationError(format_validation_error(e)) from e

    async def dispatch(self, payload: Any) -> GatewayResponse:
        try:
            request = self.validate(payload)
            body = await self._run(request)
        except ValidationError as e:
            logger.info(f"[{self.__class__.__name__}] Rejected request: {e}")
            return error_response(e.status, str(e))
        except UpstreamError as e:
            logger.error(f"❌ [{self.__class__.__name__}] {e} (body: {e.body[:200]})")
            return error_response(e.status, str(e))
        except GatewayError as e:
            logger.error(f"❌ [{self.__class__.__name__}] {e}")
            return error_response(e.status, str(e))
        except Exception as e:
            logger.error(f"❌ [{self.__class__.__name__}] Unexpected error: {e}", exc_info=True)
            return error_response(500, "Internal server error")

        if body is None:
            return GatewayResponse(404, None, {"Cache-Control": NO_STORE})
        return GatewayResponse(200, body, {"Cache-Control": CACHE_CONTROL_BY_MODE[request.mode]})

    async def _run(self, request: QueryRequest) -> Any:
        catalog = self._catalog
        if isinstance(request, SearchRequest):
            return await catalog.search(request.term, request.limit, request.offset)
        if isinstance(request, TrendingRequest):
            return await catalog.trending(request.limit, request.offset)
        if isinstance(request, DiscoverRequest):
            return await catalog.discover(request.filters, request.sort, request.limit, request.offset)
        if isinstance(request, TaxonomyRequest):
            return await catalog.taxonomy(request.resource)
        if isinstance(request, DetailRequest):
            return await catalog.detail(request.id)
        if isinstance(request, RecommendRequest):
            return await catalog.recommend(request.id, request.limit)
        if isinstance(request, BulkRequest):
            return await catalog.bulk(request.ids)
        if isinstance(request, MultiRequest):
            return await catalog.multi(request.body)
        raise ValidationError(f"Unhandled mode: {request.mode}")
