# ===== IMPORTS & DEPENDENCIES =====
import logging
from typing import Iterable, List, Sequence

from steam_toolkit.config import UNKNOWN_APP_MARKER
from steam_toolkit.models.records import DlcRecord
from steam_toolkit.sources.steamdb_page import fallback_name
from steam_toolkit.utils.dedup import dedupe_by

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====

def reconcile(scraped_dlc: Sequence[DlcRecord], api_dlc_ids: Iterable[str]) -> List[DlcRecord]:
    """
    Picks one DLC source for this refresh: the scraped records when there are
    any, otherwise the API's bare ids wrapped with placeholder names.
    The two sources are never merged per id.
    """
    if scraped_dlc:
        logger.debug(f"[reconcile] Using {len(scraped_dlc)} scraped DLC records.")
        return dedupe_by(scraped_dlc, key=lambda record: record.id)

    wrapped = [DlcRecord(id=str(dlc_id), name=fallback_name("DLC", str(dlc_id))) for dlc_id in api_dlc_ids]
    logger.debug(f"[reconcile] No scraped DLC; wrapping {len(wrapped)} API ids.")
    return dedupe_by(wrapped, key=lambda record: record.id)


def drop_unknown_apps(records: Iterable[DlcRecord]) -> List[DlcRecord]:
    """Removes DLC that SteamDB lists as 'SteamDB Unknown App'."""
    return [record for record in records if UNKNOWN_APP_MARKER not in record.name]
