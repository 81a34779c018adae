# ===== IMPORTS & DEPENDENCIES =====
import logging
import re
from typing import Optional
from urllib.parse import urlparse, parse_qs
from bs4 import BeautifulSoup

from steam_toolkit.core.errors import AppIdNotFound

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

APP_PAGE_RX = re.compile(r'/app/(\d+)')
_BARE_ID_RX = re.compile(r'^\s*(\d+)\s*$')

# ===== UTILITY FUNCTIONS =====

def detect_app_id(url: str, html: Optional[str] = None) -> Optional[str]:
    """
    Identifies the Steam App ID for a page, checking in priority order:
    a bare numeric id, the URL path, the `appid` query parameter, the
    `og:url` meta tag, and finally the first Steam store link on the page.
    Returns None when nothing matches.
    """
    bare = _BARE_ID_RX.match(url or '')
    if bare:
        return bare.group(1)

    parsed = urlparse(url or '')
    match = APP_PAGE_RX.search(parsed.path)
    if match:
        logger.debug(f"[detect_app_id] Found '{match.group(1)}' in URL path.")
        return match.group(1)

    app_id_param = parse_qs(parsed.query).get('appid')
    if app_id_param and app_id_param[0].strip():
        logger.debug(f"[detect_app_id] Found '{app_id_param[0]}' in query string.")
        return app_id_param[0].strip()

    if not html:
        return None

    soup = BeautifulSoup(html, 'lxml')
    og_url = soup.select_one('meta[property="og:url"]')
    match = APP_PAGE_RX.search(og_url.get('content', '')) if og_url else None
    if match:
        logger.debug(f"[detect_app_id] Found '{match.group(1)}' in og:url meta tag.")
        return match.group(1)

    app_link = soup.select_one('a[href*="store.steampowered.com/app/"]')
    match = APP_PAGE_RX.search(app_link.get('href', '')) if app_link else None
    if match:
        logger.debug(f"[detect_app_id] Found '{match.group(1)}' in a store link.")
        return match.group(1)

    logger.warning(f"⚠️ [detect_app_id] No Steam App ID found for '{url}'.")
    return None


def require_app_id(url: str, html: Optional[str] = None) -> str:
    """Like detect_app_id, but a missing id is terminal: raises AppIdNotFound."""
    app_id = detect_app_id(url, html)
    if not app_id:
        raise AppIdNotFound(f"Unable to identify a Steam App ID for '{url}'.")
    return app_id
