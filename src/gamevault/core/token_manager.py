# ===== IMPORTS & DEPENDENCIES =====
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import aiohttp

from gamevault.config import TWITCH_TOKEN_URL, TOKEN_REFRESH_MARGIN, REQUEST_TIMEOUT
from gamevault.core.errors import CredentialsMissing, TokenRequestFailed

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


# ===== TYPES & INTERFACES =====
@dataclass(frozen=True)
class BearerToken:
    value: str
    expires_at: float

    def is_fresh(self, now: float, margin: float = TOKEN_REFRESH_MARGIN) -> bool:
        return now < self.expires_at - margin


# ===== CORE BUSINESS LOGIC =====
class TokenManager:
    """
    Acquires and caches a Twitch OAuth2 client-credentials token for IGDB.

    A token is never handed out within `refresh_margin` seconds of its expiry;
    it is refreshed instead. There is no lock around the refresh: two callers
    that both see a stale token will both perform the exchange and the last one
    wins. Both tokens are valid, so the duplicate request is accepted.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        client_id: Optional[str],
        client_secret: Optional[str],
        token_url: str = TWITCH_TOKEN_URL,
        refresh_margin: float = TOKEN_REFRESH_MARGIN,
        clock: Callable[[], float] = time.time,
    ):
        self._session = session
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._refresh_margin = refresh_margin
        self._clock = clock
        self._token: Optional[BearerToken] = None

    @property
    def client_id(self) -> str:
        if not self._client_id or not self._client_secret:
            raise CredentialsMissing()
        return self._client_id

    async def get_token(self) -> str:
        """Returns a bearer token value that stays valid for at least `refresh_margin` seconds."""
        client_id = self.client_id
        now = self._clock()
        if self._token and self._token.is_fresh(now, self._refresh_margin):
            return self._token.value

        logger.info(f"➡️ [{self.__class__.__name__}] Requesting a new Twitch access token.")
        params = {
            'client_id': client_id,
            'client_secret': self._client_secret,
            'grant_type': 'client_credentials',
        }
        async with self._session.post(self._token_url, params=params, timeout=REQUEST_TIMEOUT) as response:
            if not 200 <= response.status < 300:
                body = await response.text()
                logger.error(f"❌ [{self.__class__.__name__}] Token exchange rejected with status {response.status}.")
                raise TokenRequestFailed(response.status, body)
            try:
                data = await response.json(content_type=None)
                value = data['access_token']
                expires_in = float(data['expires_in'])
            except (ValueError, TypeError, KeyError) as e:
                logger.error(f"❌ [{self.__class__.__name__}] Token response is malformed: {type(e).__name__}")
                raise TokenRequestFailed(response.status, "malformed token response") from e
            if not isinstance(value, str) or not value:
                raise TokenRequestFailed(response.status, "malformed token response")

        self._token = BearerToken(value=value, expires_at=now + expires_in)
        logger.info(f"✅ [{self.__class__.__name__}] Access token refreshed, valid for {expires_in:.0f}s.")
        return self._token.value
