# ===== IMPORTS & DEPENDENCIES =====
import logging
from datetime import datetime
from typing import List, Optional, Sequence, TypeVar

from steam_toolkit.config import MAX_DISPLAY_ENTRIES
from steam_toolkit.models.records import PackageRecord, Platforms, StoreRecord

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

T = TypeVar('T')

# ===== UTILITY FUNCTIONS =====

def format_package(package: PackageRecord) -> str:
    """One display line per package: title, price and discount."""
    title = package.title or f"Package {package.id}"
    if package.price is None:
        return title
    return f"{title} - Price: {package.price:.2f} (Discount: {package.discount or 0}%)"


def format_platforms(platforms: Platforms) -> str:
    """'Windows, Mac, Linux' for the supported ones, or 'Unknown'."""
    available = [
        label for label, enabled in (
            ("Windows", platforms.windows), ("Mac", platforms.mac), ("Linux", platforms.linux)
        ) if enabled
    ]
    return ", ".join(available) if available else "Unknown"


def format_date(raw_date: Optional[str]) -> str:
    """
    Renders ISO timestamps as e.g. 'Jan 5, 2024'. Steam's own release date
    strings are already human-readable and come back unchanged.
    """
    if not raw_date:
        return "Unknown"
    try:
        parsed = datetime.fromisoformat(raw_date)
    except ValueError:
        return raw_date
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def format_release(record: StoreRecord) -> str:
    suffix = "" if record.is_released else " (Coming Soon)"
    return f"{format_date(record.release_date)}{suffix}"


def clamp(items: Sequence[T], max_entries: int = MAX_DISPLAY_ENTRIES) -> List[T]:
    """Truncates long lists for display; exports always use the full list."""
    if len(items) <= max_entries:
        return list(items)
    logger.warning(f"Truncating list to {max_entries} entries for readability.")
    return list(items[:max_entries])
