# ===== IMPORTS & DEPENDENCIES =====
import logging
import asyncio
import aiohttp
import random
from typing import Optional, Any, Dict

from steam_toolkit.config import (
    COMMON_HEADERS, REQUEST_TIMEOUT, MAX_RETRIES, RETRY_INITIAL_DELAY, RETRYABLE_STATUSES
)
from steam_toolkit.core.errors import TransportError

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class BaseWebClient:
    """A base class for web clients providing robust JSON fetching over a shared session."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        max_retries: int = MAX_RETRIES,
        initial_delay: float = RETRY_INITIAL_DELAY,
        timeout: float = REQUEST_TIMEOUT
    ):
        self._session = session
        self._max_retries = max(1, max_retries)
        self._initial_delay = initial_delay
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        logger.debug(f"[{self.__class__.__name__}] Initialized with {self._max_retries} attempts and {timeout}s timeout")

    async def _fetch_json(
        self,
        url: str,
        subject: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Any:
        """
        GETs a URL and decodes its JSON body, retrying with exponential backoff.
        Raises TransportError once retries are exhausted or the status is not retryable.
        `subject` is the id the request is about, carried on the error.
        """
        request_headers = headers or COMMON_HEADERS
        logger.info(f"➡️ [{self.__class__.__name__}] Fetching from network: {url} {params or ''}")

        for attempt in range(self._max_retries):
            try:
                async with self._session.request(
                    'GET', url, params=params, headers=request_headers, timeout=self._timeout
                ) as response:
                    if 200 <= response.status < 300:
                        # content_type=None handles non-standard API content-types
                        return await response.json(content_type=None)

                    logger.warning(f"⚠️ [{self.__class__.__name__}] HTTP error on {url} (Attempt {attempt + 1}/{self._max_retries}): Status {response.status}")
                    if attempt >= self._max_retries - 1 or response.status not in RETRYABLE_STATUSES:
                        logger.error(f"❌ [{self.__class__.__name__}] Unrecoverable error on {url}. Giving up.")
                        raise TransportError(subject, f"Steam Store API responded with {response.status}", status=response.status)
            except (asyncio.TimeoutError, aiohttp.ClientError, ValueError) as e:
                # ValueError covers a body that is not valid JSON
                logger.warning(f"⚠️ [{self.__class__.__name__}] Network error on {url} (Attempt {attempt + 1}/{self._max_retries}): {type(e).__name__}")
                if attempt >= self._max_retries - 1:
                    logger.error(f"❌ [{self.__class__.__name__}] Failed to fetch {url} after {self._max_retries} attempts.")
                    raise TransportError(subject, f"Request to Steam Store API failed: {type(e).__name__}") from e

            delay = self._initial_delay * (2 ** attempt) + random.uniform(0, self._initial_delay)
            logger.info(f"Retrying request to {url} in {delay:.2f} seconds...")
            await asyncio.sleep(delay)

        raise TransportError(subject, "Steam Store API could not be reached")
