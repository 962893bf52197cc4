# ===== IMPORTS & DEPENDENCIES =====
import json
import logging
from typing import AsyncIterator, Optional

import aiohttp
from aiohttp import web

from gamevault.api.router import QueryRouter, error_response
from gamevault.config import REQUEST_TIMEOUT
from gamevault.core.gateway import Gateway, build_gateway

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

GATEWAY_KEY = web.AppKey("gateway", Gateway)
ROUTER_KEY = web.AppKey("router", QueryRouter)


# ===== REQUEST HANDLERS =====
async def query_handler(request: web.Request) -> web.Response:
    """POST /api/igdb/query: one tagged query in, normalized JSON out."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        result = error_response(400, "Invalid JSON body")
    else:
        result = await request.app[ROUTER_KEY].dispatch(payload)
    return web.json_response(result.body, status=result.status, headers=result.headers)


async def health_handler(request: web.Request) -> web.Response:
    gateway = request.app.get(GATEWAY_KEY)
    return web.json_response({
        "status": "ok",
        "admission": gateway.admission.stats() if gateway else None,
        "cache": gateway.trending_cache.stats() if gateway else None,
    })


# ===== INITIALIZATION & STARTUP =====
async def gateway_context(app: web.Application) -> AsyncIterator[None]:
    """Builds the gateway once per process and closes its HTTP session on shutdown."""
    session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=REQUEST_TIMEOUT))
    try:
        gateway = build_gateway(session)
    except Exception:
        await session.close()
        raise
    app[GATEWAY_KEY] = gateway
    app[ROUTER_KEY] = QueryRouter(gateway.catalog)
    yield
    await session.close()
    logger.info("Gateway HTTP session closed.")


def create_app(router: Optional[QueryRouter] = None) -> web.Application:
    """Creates the web application. Passing a `router` skips building the real gateway (used by tests)."""
    app = web.Application()
    if router is None:
        app.cleanup_ctx.append(gateway_context)
    else:
        app[ROUTER_KEY] = router
    app.router.add_post("/api/igdb/query", query_handler)
    app.router.add_get("/health", health_handler)
    return app
