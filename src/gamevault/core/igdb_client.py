# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
import math
from typing import Any, Awaitable, Callable, Optional

import aiohttp

from gamevault.config import (
    IGDB_BASE_URL, IGDB_HEADERS, MAX_RETRIES, MAX_RETRY_AFTER, HTTP_BACKOFF_BASE, TRANSPORT_BACKOFF_BASE,
    REQUEST_TIMEOUT,
)
from gamevault.core.admission import AdmissionController
from gamevault.core.errors import (
    TransportError, UpstreamClientError, UpstreamRateLimited, UpstreamServerError
)
from gamevault.core.token_manager import TokenManager

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


def backoff_delay(base: float, retry_number: int) -> float:
    """Exponential backoff: `base * 2^(retry_number - 1)` for retry 1, 2, 3..."""
    return base * (2 ** (retry_number - 1))


def parse_retry_after(value: Optional[str], ceiling: float = MAX_RETRY_AFTER) -> Optional[float]:
    """
    Reads a `Retry-After` header given in seconds, capped at `ceiling`.
    HTTP-date, negative and non-finite values are ignored.
    """
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return min(seconds, ceiling)


# ===== CORE BUSINESS LOGIC =====
class IGDBClient:
    """Issues authenticated POST queries to IGDB behind admission control, with retries and backoff."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        tokens: TokenManager,
        admission: AdmissionController,
        base_url: str = IGDB_BASE_URL,
        max_retries: int = MAX_RETRIES,
        timeout: float = REQUEST_TIMEOUT,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._session = session
        self._tokens = tokens
        self._admission = admission
        self._base_url = base_url.rstrip('/')
        self._max_retries = max_retries
        self._timeout = timeout
        self._sleep = sleep

    async def send(self, resource: str, body: str) -> Any:
        """
        Sends one logical query. A single admission permit covers every retry
        attempt and is released exactly once, whatever the outcome.
        """
        permit = await self._admission.acquire()
        try:
            return await self._send_with_retry(resource, body)
        finally:
            permit.release()

    async def _send_with_retry(self, resource: str, body: str) -> Any:
        url = f"{self._base_url}/{resource.lstrip('/')}"

        for attempt in range(self._max_retries + 1):
            retry_number = attempt + 1
            exhausted = attempt >= self._max_retries

            try:
                # The token exchange shares the transport retry budget with the query itself.
                headers = {
                    **IGDB_HEADERS,
                    'Client-ID': self._tokens.client_id,
                    'Authorization': f"Bearer {await self._tokens.get_token()}",
                }
                logger.debug(f"➡️ [{self.__class__.__name__}] POST {url} (Attempt {retry_number}/{self._max_retries + 1})")
                async with self._session.post(url, data=body, headers=headers, timeout=self._timeout) as response:
                    status = response.status
                    if 200 <= status < 300:
                        return await response.json(content_type=None)
                    text = await response.text()
                    retry_after = parse_retry_after(response.headers.get('Retry-After'))
            except (asyncio.TimeoutError, aiohttp.ClientError) as e:
                logger.warning(f"⚠️ [{self.__class__.__name__}] Network error on {resource} (Attempt {retry_number}/{self._max_retries + 1}): {type(e).__name__}")
                if exhausted:
                    logger.error(f"❌ [{self.__class__.__name__}] Failed to reach IGDB after {retry_number} attempts.")
                    raise TransportError(type(e).__name__) from e
                delay = backoff_delay(TRANSPORT_BACKOFF_BASE, retry_number)
                await self._sleep(delay)
                continue

            if status == 429:
                logger.warning(f"⚠️ [{self.__class__.__name__}] Rate limited on {resource} (Attempt {retry_number}/{self._max_retries + 1}).")
                if exhausted:
                    raise UpstreamRateLimited(status, text)
                delay = retry_after if retry_after is not None else backoff_delay(HTTP_BACKOFF_BASE, retry_number)
            elif status >= 500:
                logger.warning(f"⚠️ [{self.__class__.__name__}] Server error {status} on {resource} (Attempt {retry_number}/{self._max_retries + 1}).")
                if exhausted:
                    raise UpstreamServerError(status, text)
                delay = backoff_delay(HTTP_BACKOFF_BASE, retry_number)
            else:
                logger.error(f"❌ [{self.__class__.__name__}] Unrecoverable status {status} on {resource}: {text[:200]}")
                raise UpstreamClientError(status, text)

            logger.info(f"Retrying {resource} in {delay:.2f} seconds...")
            await self._sleep(delay)

        # Only reachable when max_retries is negative.
        raise TransportError("retry budget exhausted")
