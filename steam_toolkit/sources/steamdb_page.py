# ===== IMPORTS & DEPENDENCIES =====
import logging
import re
from typing import Callable, List, Optional, TypeVar, Union
from bs4 import BeautifulSoup, Tag

from steam_toolkit.models.records import DlcRecord, AchievementRecord, DepotRecord, PageSnapshot
from steam_toolkit.utils.dedup import dedupe_by

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

T = TypeVar('T')

DLC_ROW_SELECTOR = '#dlc .app[data-appid], #table-sortable .app[data-appid]'
ACHIEVEMENT_ROW_SELECTOR = '#achievements .achievement'
DEPOT_ROW_SELECTOR = '#depots tr[data-depotid], #depots tbody tr'

_APP_LINK_RX = re.compile(r'/app/(\d+)')
_DEPOT_LINK_RX = re.compile(r'/depot/(\d+)')
_DIGITS_RX = re.compile(r'^\s*(\d+)\s*$')

# ===== UTILITY FUNCTIONS =====

def fallback_name(kind: str, record_id: str) -> str:
    return f"{kind} {record_id}"


def _cell_text(row: Tag, index: int) -> str:
    cell = row.select_one(f'td:nth-of-type({index})')
    return cell.get_text(' ', strip=True) if cell else ""


def _text(row: Tag, selector: str) -> str:
    node = row.select_one(selector)
    return node.get_text(' ', strip=True) if node else ""


def _attr(node: Optional[Tag], name: str) -> str:
    if node is None:
        return ""
    value = node.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def _image_url(row: Tag, selector: str) -> str:
    image = row.select_one(selector)
    # SteamDB lazy-loads icons, so the real URL can sit in data-src
    return _attr(image, 'data-src') or _attr(image, 'src')


def _id_from_link(row: Tag, pattern: "re.Pattern[str]") -> str:
    for link in row.select('a[href]'):
        match = pattern.search(_attr(link, 'href'))
        if match:
            return match.group(1)
    return ""


def _id_from_first_cell(row: Tag) -> str:
    match = _DIGITS_RX.match(_cell_text(row, 1))
    return match.group(1) if match else ""

# ===== ROW EXTRACTORS =====

def extract_dlc_row(row: Tag, is_search_page: bool = False) -> Optional[DlcRecord]:
    """Reads one DLC table row. Returns None when the row carries no usable id."""
    if is_search_page and _cell_text(row, 2) != "DLC":
        return None

    dlc_id = _attr(row, 'data-appid') or _id_from_link(row, _APP_LINK_RX)
    if not dlc_id:
        return None

    name = _cell_text(row, 3 if is_search_page else 2)
    return DlcRecord(id=dlc_id, name=name or fallback_name("DLC", dlc_id))


def extract_achievement_row(row: Tag) -> Optional[AchievementRecord]:
    """Reads one achievement block, keyed by its internal API name."""
    api_name = _attr(row, 'data-name') or _text(row, '.achievement_api')
    if not api_name:
        return None

    return AchievementRecord(
        name=api_name,
        display_name=_text(row, '.achievement_name') or fallback_name("Achievement", api_name),
        description=_text(row, '.achievement_desc'),
        icon=_image_url(row, 'img.achievement_image'),
        icon_gray=_image_url(row, 'img.achievement_image_gray'),
    )


def extract_depot_row(row: Tag) -> Optional[DepotRecord]:
    """Reads one depot table row."""
    depot_id = _attr(row, 'data-depotid') or _id_from_link(row, _DEPOT_LINK_RX) or _id_from_first_cell(row)
    if not depot_id:
        return None

    manifests = _text(row, '.depot-manifests') or _cell_text(row, 3)
    os_list = _text(row, '.depot-os') or _attr(row, 'data-os') or _cell_text(row, 4)
    return DepotRecord(
        id=depot_id,
        name=_cell_text(row, 2) or fallback_name("Depot", depot_id),
        manifests=manifests,
        os_list=os_list,
    )

# ===== CORE BUSINESS LOGIC =====
class SteamDBPage:
    """
    Reads the DLC, achievement and depot sections of one SteamDB page snapshot.

    Each collector is independent and side-effect free: a missing section
    yields an empty list, a row without an id is skipped, and a row that fails
    to parse only loses itself.
    """

    def __init__(self, markup: Union[str, BeautifulSoup]):
        self._soup = markup if isinstance(markup, BeautifulSoup) else BeautifulSoup(markup, 'lxml')

    @property
    def is_search_page(self) -> bool:
        return len(self._soup.select('#table-sortable .app[data-appid]')) > 1

    def _collect(self, section: str, selector: str, extract: Callable[[Tag], Optional[T]]) -> List[T]:
        rows = self._soup.select(selector)
        if not rows:
            logger.debug(f"[{self.__class__.__name__}] No '{section}' section on this page.")
            return []

        records: List[T] = []
        for index, row in enumerate(rows):
            try:
                record = extract(row)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                logger.debug(f"[{self.__class__.__name__}] Skipping malformed {section} row #{index}: {e}")
                continue
            if record is None:
                logger.debug(f"[{self.__class__.__name__}] Skipping {section} row #{index}: no id found.")
                continue
            records.append(record)
        return records

    def collect_dlc(self) -> List[DlcRecord]:
        is_search_page = self.is_search_page
        records = self._collect('dlc', DLC_ROW_SELECTOR, lambda row: extract_dlc_row(row, is_search_page))
        return dedupe_by(records, key=lambda record: record.id)

    def collect_achievements(self) -> List[AchievementRecord]:
        records = self._collect('achievements', ACHIEVEMENT_ROW_SELECTOR, extract_achievement_row)
        return dedupe_by(records, key=lambda record: record.name)

    def collect_depots(self) -> List[DepotRecord]:
        records = self._collect('depots', DEPOT_ROW_SELECTOR, extract_depot_row)
        return dedupe_by(records, key=lambda record: record.id)

    def snapshot(self) -> PageSnapshot:
        """Runs all three collectors over the current markup."""
        return PageSnapshot(
            dlc=tuple(self.collect_dlc()),
            achievements=tuple(self.collect_achievements()),
            depots=tuple(self.collect_depots()),
        )
