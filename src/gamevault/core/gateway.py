# ===== IMPORTS & DEPENDENCIES =====
import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp

from gamevault.config import (
    IGDB_BASE_URL, TWITCH_CLIENT_ID, TWITCH_CLIENT_SECRET, TWITCH_TOKEN_URL, TRENDING_CACHE_TTL
)
from gamevault.core.admission import AdmissionController
from gamevault.core.cache import ResponseCache
from gamevault.core.errors import CredentialsMissing
from gamevault.core.igdb_client import IGDBClient
from gamevault.core.token_manager import TokenManager
from gamevault.sources.igdb_catalog import IGDBCatalog

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


# ===== CORE BUSINESS LOGIC =====
@dataclass
class Gateway:
    """The process-wide gateway state: one token cache, one admission bucket, one trending cache."""
    tokens: TokenManager
    admission: AdmissionController
    client: IGDBClient
    trending_cache: ResponseCache
    catalog: IGDBCatalog


def build_gateway(
    session: aiohttp.ClientSession,
    client_id: Optional[str] = TWITCH_CLIENT_ID,
    client_secret: Optional[str] = TWITCH_CLIENT_SECRET,
    base_url: str = IGDB_BASE_URL,
    token_url: str = TWITCH_TOKEN_URL,
) -> Gateway:
    """Wires the gateway once at startup. Missing credentials are a configuration error."""
    if not client_id or not client_secret:
        logger.critical("🔥 Twitch credentials are not configured. The gateway cannot start.")
        raise CredentialsMissing()

    tokens = TokenManager(session, client_id, client_secret, token_url=token_url)
    admission = AdmissionController()
    client = IGDBClient(session, tokens, admission, base_url=base_url)
    trending_cache = ResponseCache(ttl=TRENDING_CACHE_TTL)
    catalog = IGDBCatalog(client, trending_cache)
    logger.info(f"✅ Gateway ready for {base_url} (capacity={admission.capacity}, max_in_flight={admission.max_in_flight}).")
    return Gateway(tokens, admission, client, trending_cache, catalog)
