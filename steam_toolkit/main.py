# ===== IMPORTS & DEPENDENCIES =====
import argparse
import asyncio
import logging
import os
import sys
import aiohttp
from contextlib import AsyncExitStack
from typing import List, Optional

# --- Configuration ---
from steam_toolkit.config import LOG_LEVEL, CACHE_DIR, STEAM_STORE_APP_URL

# --- Core Components ---
from steam_toolkit.core.cache_store import KeyValueStore, FileStore, MemoryStore
from steam_toolkit.core.errors import AppIdNotFound, CacheFault
from steam_toolkit.core.pipeline import ToolkitPipeline, PageSource

# --- Data Models ---
from steam_toolkit.models.records import PageSnapshot, ToolkitState

# --- Data Sources ---
from steam_toolkit.sources.store_api import StoreApiClient
from steam_toolkit.sources.steamdb_page import SteamDBPage
from steam_toolkit.sources.live_page import open_steamdb_page, settle_page

# --- Exporters & Utilities ---
from steam_toolkit.exporters.registry import EXPORT_FORMATS, render_export, to_windows_line_breaks
from steam_toolkit.utils.formatting import clamp, format_package, format_platforms, format_release, format_date
from steam_toolkit.utils.url_utils import require_app_id

# ===== CONFIGURATION & CONSTANTS =====
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# ===== DISPLAY =====

def render_summary(state: ToolkitState) -> str:
    """Plain-text view of a state, the command-line counterpart of the panel."""
    record = state.record
    title = f"{record.name} · {state.app_id}" if record else f"Steam Data Toolkit · {state.app_id}"
    lines = [title, "=" * len(title)]

    if state.error:
        lines.append(f"Error: {state.error}")
    elif record:
        lines.extend([
            f"App Type: {record.type or 'Unknown'}",
            f"Release: {format_release(record)}",
            f"Platforms: {format_platforms(record.platforms)}",
            f"Price: {record.price}",
            f"Developers: {', '.join(record.developers) or 'Unknown'}",
            f"Publishers: {', '.join(record.publishers) or 'Unknown'}",
            f"Fetched: {format_date(record.fetched_at)}",
            f"Store: {STEAM_STORE_APP_URL.format(app_id=state.app_id)}",
        ])
        if record.packages:
            lines.append("")
            lines.append(f"Packages ({len(record.packages)}):")
            lines.extend(f"  {format_package(package)}" for package in clamp(record.packages))

    sections = (
        ("Downloadable Content", [f"{dlc.id} - {dlc.name}" for dlc in state.dlc]),
        ("Achievements", [f"{a.name} - {a.display_name}" for a in state.achievements]),
        ("Depots", [f"{d.id} - {d.name}" for d in state.depots]),
    )
    for heading, entries in sections:
        if not entries:
            continue
        lines.append("")
        lines.append(f"{heading} ({len(entries)}):")
        lines.extend(f"  {entry}" for entry in clamp(entries))

    return "\n".join(lines) + "\n"

# ===== INITIALIZATION & STARTUP =====

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="steam-toolkit",
        description="Collect DLC, package, achievement and depot data from Steam and SteamDB."
    )
    parser.add_argument("target", help="A Steam App ID, or a Steam/SteamDB app URL")
    page = parser.add_mutually_exclusive_group()
    page.add_argument("--html", metavar="FILE", help="A saved SteamDB app page to scrape")
    page.add_argument("--live", action="store_true", help="Open the SteamDB app page in a headless browser")
    parser.add_argument("--format", choices=sorted(EXPORT_FORMATS), help="Export format; prints a summary when omitted")
    parser.add_argument("--output", metavar="FILE", help="Write the export to FILE (Windows line breaks)")
    parser.add_argument("--refresh", action="store_true", help="Bypass the cache")
    parser.add_argument("--cache-dir", default=None, help=f"Cache records on disk (e.g. '{CACHE_DIR}')")
    parser.add_argument("--ignore-unknown", action="store_true", help="Drop DLC named 'SteamDB Unknown App'")
    return parser


def build_store(cache_dir: Optional[str]) -> KeyValueStore:
    if not cache_dir:
        return MemoryStore()
    try:
        return FileStore(cache_dir)
    except CacheFault as e:
        logger.warning(f"⚠️ Falling back to an in-memory cache: {e}")
        return MemoryStore()


def _read_html(path: str) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _write_output(path: str, content: str) -> None:
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(to_windows_line_breaks(content))
    logger.info(f"✅ File '{path}' written successfully.")


async def main(argv: Optional[List[str]] = None) -> int:
    """Runs one refresh for the requested app and prints or writes the result."""
    args = build_parser().parse_args(argv)

    try:
        html = _read_html(args.html) if args.html else None
    except OSError as e:
        logger.error(f"❌ Cannot read saved page '{args.html}': {e}")
        return 1

    try:
        app_id = require_app_id(args.target, html)
    except AppIdNotFound as e:
        logger.error(f"❌ {e}")
        return 1

    async with AsyncExitStack() as stack:
        session = await stack.enter_async_context(aiohttp.ClientSession())

        page_source: Optional[PageSource] = None
        if html is not None:
            saved_page = SteamDBPage(html)

            async def scrape_saved_page() -> PageSnapshot:
                return saved_page.snapshot()
            page_source = scrape_saved_page
        elif args.live:
            live_page = await stack.enter_async_context(open_steamdb_page(app_id))

            async def scrape_live_page() -> PageSnapshot:
                return await settle_page(live_page)
            page_source = scrape_live_page

        client = StoreApiClient(session, store=build_store(args.cache_dir))
        pipeline = ToolkitPipeline(app_id, client, page_source, ignore_unknown_apps=args.ignore_unknown)
        state = await pipeline.run(force_refresh=args.refresh)

    if args.format:
        content = render_export(args.format, state)
        if args.output:
            _write_output(args.output, content)
        else:
            sys.stdout.write(content)
    else:
        sys.stdout.write(render_summary(state))

    return 1 if state.error else 0


def run() -> None:
    if os.name == 'nt':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
