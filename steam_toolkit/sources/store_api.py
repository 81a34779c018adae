# ===== IMPORTS & DEPENDENCIES =====
import logging
import asyncio
import json
import aiohttp
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List

from steam_toolkit.core.base_client import BaseWebClient
from steam_toolkit.core.cache_store import KeyValueStore, MemoryStore
from steam_toolkit.core.errors import SchemaError, FetchCancelled, CacheFault
from steam_toolkit.models.records import AppDetailsData, StoreRecord, PackageRecord, Platforms
from steam_toolkit.config import (
    STEAM_APPDETAILS_URL, APPDETAILS_FILTERS, STORE_COUNTRY, STORE_LANGUAGE, CACHE_NAMESPACE, COMMON_HEADERS
)

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)


def cache_key(app_id: str) -> str:
    return f"{CACHE_NAMESPACE}:{app_id}"


def normalize(app_id: str, data: Optional[AppDetailsData]) -> StoreRecord:
    """Maps the verbose `appdetails` data block into a StoreRecord."""
    data = data or {}
    release_date = data.get('release_date') or {}

    packages: List[PackageRecord] = []
    for group in data.get('package_groups') or []:
        if not group or not group.get('subs'):
            continue
        for sub in group['subs']:
            cents = sub.get('price_in_cents_with_discount')
            packages.append(PackageRecord(
                id=sub.get('packageid'),
                title=sub.get('title'),
                price=cents / 100 if cents is not None else None,
                discount=sub.get('discount_pct'),
            ))

    return StoreRecord(
        app_id=str(app_id),
        name=data.get('name'),
        type=data.get('type'),
        release_date=release_date.get('date'),
        # Only an explicit `false` counts as released; a missing flag does not.
        is_released=release_date.get('coming_soon') is False,
        price_overview=dict(data['price_overview']) if data.get('price_overview') else None,
        developers=tuple(data.get('developers') or ()),
        publishers=tuple(data.get('publishers') or ()),
        platforms=Platforms.from_mapping(data.get('platforms')),
        dlc=tuple(str(dlc_id) for dlc_id in data.get('dlc') or ()),
        packages=tuple(packages),
        fetched_at=datetime.now(timezone.utc).isoformat(),
    )

# ===== CORE BUSINESS LOGIC =====
class StoreApiClient(BaseWebClient):
    """
    Fetches app metadata from the Steam Storefront API and normalizes it.

    Keeps at most one request in flight: starting a fetch cancels the previous
    one, and only the most recent fetch may write the cache or return a record.
    """

    def __init__(self, session: aiohttp.ClientSession, store: Optional[KeyValueStore] = None, **kwargs):
        super().__init__(session=session, **kwargs)
        self._store = store if store is not None else MemoryStore()
        self._inflight: Optional[asyncio.Task] = None
        self._generation = 0

    def _read_cache(self, app_id: str) -> Optional[StoreRecord]:
        key = cache_key(app_id)
        try:
            cached = self._store.get(key)
        except CacheFault as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Unable to read cache '{key}': {e}")
            return None
        if not cached:
            return None
        try:
            record = StoreRecord.from_dict(json.loads(cached))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Unable to parse cache '{key}': {e}. Re-fetching.")
            return None
        logger.info(f"✅ [{self.__class__.__name__}] Loaded app {app_id} from cache.")
        return record

    def _write_cache(self, record: StoreRecord) -> None:
        key = cache_key(record.app_id)
        try:
            self._store.set(key, json.dumps(record.to_dict(), ensure_ascii=False))
            logger.info(f"💾 [{self.__class__.__name__}] Saved app {record.app_id} to cache.")
        except CacheFault as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Unable to write cache '{key}': {e}")

    def invalidate(self, app_id: str) -> None:
        """Drops the cached record for an app, if any."""
        try:
            self._store.remove(cache_key(app_id))
        except CacheFault as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Unable to remove cache for app {app_id}: {e}")

    async def _request(self, app_id: str) -> StoreRecord:
        """Performs the network round-trip and normalization for one app."""
        params = {
            'appids': app_id,
            'cc': STORE_COUNTRY,
            'l': STORE_LANGUAGE,
            'filters': APPDETAILS_FILTERS,
        }
        headers = {**COMMON_HEADERS, 'Accept': 'application/json'}
        payload = await self._fetch_json(STEAM_APPDETAILS_URL, subject=app_id, params=params, headers=headers)

        app_response = payload.get(app_id) if isinstance(payload, dict) else None
        if not isinstance(app_response, dict) or app_response.get('success') is not True:
            logger.warning(f"[{self.__class__.__name__}] Steam API response for App ID {app_id} was unsuccessful or empty.")
            raise SchemaError(app_id, "Steam Store API returned an unsuccessful response")

        return normalize(app_id, app_response.get('data'))

    async def fetch(self, app_id: str, force_refresh: bool = False) -> StoreRecord:
        """
        Returns the StoreRecord for `app_id`, from cache unless `force_refresh` is set.
        Raises TransportError/SchemaError on failure and FetchCancelled when a newer
        fetch took over before this one finished.
        """
        app_id = str(app_id)
        if not force_refresh:
            cached = self._read_cache(app_id)
            if cached is not None:
                return cached

        self._generation += 1
        generation = self._generation
        if self._inflight is not None and not self._inflight.done():
            logger.info(f"[{self.__class__.__name__}] Cancelling in-flight request in favour of app {app_id}.")
            self._inflight.cancel()

        task = asyncio.ensure_future(self._request(app_id))
        self._inflight = task
        try:
            record = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                raise FetchCancelled(app_id)
            raise
        finally:
            if self._inflight is task:
                self._inflight = None

        # The request may have completed before a newer fetch could cancel it.
        if generation != self._generation:
            raise FetchCancelled(app_id)

        self._write_cache(record)
        logger.info(f"✅ [{self.__class__.__name__}] Fetched '{record.name}' (App ID: {app_id}).")
        return record
