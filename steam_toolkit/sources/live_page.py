# ===== IMPORTS & DEPENDENCIES =====
import logging
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Protocol
from playwright.async_api import async_playwright, Page

from steam_toolkit.models.records import PageSnapshot
from steam_toolkit.sources.steamdb_page import SteamDBPage
from steam_toolkit.config import STEAMDB_APP_URL, LIVE_PAGE_POLL_INTERVAL, LIVE_PAGE_NAVIGATION_TIMEOUT

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== TYPES & INTERFACES =====
class SupportsContent(Protocol):
    """Anything that can hand over its current HTML, such as a playwright Page."""

    async def content(self) -> str: ...

# ===== CORE BUSINESS LOGIC =====
@asynccontextmanager
async def open_steamdb_page(app_id: str) -> AsyncIterator[Page]:
    """Launches headless Chromium and yields the SteamDB page of `app_id`."""
    url = STEAMDB_APP_URL.format(app_id=app_id)
    async with async_playwright() as p:
        browser = await p.chromium.launch()
        try:
            page = await browser.new_page()
            logger.info(f"🚀 [LivePage] Navigating to {url}")
            await page.goto(url, wait_until='domcontentloaded', timeout=LIVE_PAGE_NAVIGATION_TIMEOUT)
            yield page
        finally:
            await browser.close()
            logger.debug("[LivePage] Playwright browser closed.")


async def scrape_page(page: SupportsContent) -> PageSnapshot:
    """Scrapes the page's markup as it is right now."""
    html = await page.content()
    return SteamDBPage(html).snapshot()


async def watch_page(
    page: SupportsContent,
    interval: float = LIVE_PAGE_POLL_INTERVAL,
    max_rounds: Optional[int] = None
) -> AsyncIterator[PageSnapshot]:
    """
    Re-scrapes the page every `interval` seconds while content streams in and
    yields a snapshot only when it differs from the previous one.
    Stops after `max_rounds` polls when given.
    """
    previous: Optional[PageSnapshot] = None
    rounds = 0
    while max_rounds is None or rounds < max_rounds:
        if rounds:
            await asyncio.sleep(interval)
        rounds += 1
        snapshot = await scrape_page(page)
        if snapshot == previous:
            continue
        logger.info(
            f"[LivePage] Page changed: {len(snapshot.dlc)} DLC, "
            f"{len(snapshot.achievements)} achievements, {len(snapshot.depots)} depots."
        )
        previous = snapshot
        yield snapshot


async def settle_page(
    page: SupportsContent,
    interval: float = LIVE_PAGE_POLL_INTERVAL,
    max_rounds: int = 10
) -> PageSnapshot:
    """
    Polls until a re-scrape stops changing (or `max_rounds` is reached) and
    returns the last snapshot seen.
    """
    latest = await scrape_page(page)
    for rounds in range(1, max_rounds):
        await asyncio.sleep(interval)
        snapshot = await scrape_page(page)
        if snapshot == latest:
            logger.debug(f"[LivePage] Page settled after {rounds + 1} scrapes.")
            return snapshot
        latest = snapshot
    logger.warning(f"⚠️ [LivePage] Page still changing after {max_rounds} scrapes; using the latest state.")
    return latest
