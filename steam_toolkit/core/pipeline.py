# ===== IMPORTS & DEPENDENCIES =====
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Optional

from steam_toolkit.core.errors import RemoteError, FetchCancelled
from steam_toolkit.core.reconciler import reconcile, drop_unknown_apps
from steam_toolkit.models.records import PageSnapshot, StoreRecord, ToolkitState
from steam_toolkit.sources.store_api import StoreApiClient

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

PageSource = Callable[[], Awaitable[PageSnapshot]]

# ===== CORE BUSINESS LOGIC =====
class ToolkitPipeline:
    """
    Orchestrates fetch → scrape → reconcile for one app and hands back an
    immutable ToolkitState for display and export.
    """

    def __init__(
        self,
        app_id: str,
        client: StoreApiClient,
        page_source: Optional[PageSource] = None,
        ignore_unknown_apps: bool = False
    ):
        self.app_id = app_id
        self.client = client
        self.page_source = page_source
        self.ignore_unknown_apps = ignore_unknown_apps

    async def _scrape(self) -> PageSnapshot:
        """Reads the SteamDB page when one is attached; an absent page is an empty snapshot."""
        if self.page_source is None:
            return PageSnapshot()
        snapshot = await self.page_source()
        logger.info(
            f"[{self.__class__.__name__}] Scraped {len(snapshot.dlc)} DLC, "
            f"{len(snapshot.achievements)} achievements, {len(snapshot.depots)} depots."
        )
        return snapshot

    def assemble(self, record: Optional[StoreRecord], snapshot: PageSnapshot) -> ToolkitState:
        """Builds the display state from a record and a page snapshot."""
        api_dlc_ids = record.dlc if record else ()
        dlc = reconcile(snapshot.dlc, api_dlc_ids)
        if self.ignore_unknown_apps:
            dlc = drop_unknown_apps(dlc)
        return ToolkitState(
            app_id=self.app_id,
            record=record,
            dlc=tuple(dlc),
            achievements=snapshot.achievements,
            depots=snapshot.depots,
        )

    async def run(self, force_refresh: bool = False) -> ToolkitState:
        """
        Executes one refresh. Fetch failures become `state.error`; a superseded
        fetch becomes `state.superseded`. Scraping and reconciliation still run
        when the fetch fails, since they do not depend on it.
        """
        logger.info(f"🚀 [{self.__class__.__name__}] Refreshing app {self.app_id} (force_refresh={force_refresh})")
        record: Optional[StoreRecord] = None
        error: Optional[str] = None

        try:
            record = await self.client.fetch(self.app_id, force_refresh=force_refresh)
        except FetchCancelled:
            logger.info(f"[{self.__class__.__name__}] Refresh for app {self.app_id} was superseded.")
            return ToolkitState(app_id=self.app_id, superseded=True)
        except RemoteError as e:
            logger.error(f"❌ [{self.__class__.__name__}] Fetch failed for app {self.app_id}: {e}")
            error = str(e)

        snapshot = await self._scrape()
        state = self.assemble(record, snapshot)
        if error:
            return replace(state, error=error)
        return state

    async def refresh(self) -> ToolkitState:
        """The refresh intent: always bypasses the cache."""
        return await self.run(force_refresh=True)
