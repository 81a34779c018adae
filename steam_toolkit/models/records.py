# ===== TYPES & INTERFACES =====

from dataclasses import dataclass, field, asdict
from typing import TypedDict, List, Optional, Dict, Any, Tuple


class ReleaseDateData(TypedDict, total=False):
    date: str
    coming_soon: bool


class PriceOverviewData(TypedDict, total=False):
    currency: str
    initial: int
    final: int
    discount_percent: int
    initial_formatted: str
    final_formatted: str


class SubData(TypedDict, total=False):
    packageid: int
    title: str
    price_in_cents_with_discount: int
    discount_pct: int


class PackageGroupData(TypedDict, total=False):
    name: str
    title: str
    subs: List[SubData]


class AppDetailsData(TypedDict, total=False):
    """
    The subset of the Steam `appdetails` payload the toolkit reads.
    `total=False` because Steam omits any block it has nothing to say about,
    so every key must be treated as optional.
    """
    name: str
    type: str
    release_date: ReleaseDateData
    price_overview: PriceOverviewData
    developers: List[str]
    publishers: List[str]
    platforms: Dict[str, bool]
    dlc: List[int]
    package_groups: List[PackageGroupData]


@dataclass(frozen=True)
class Platforms:
    windows: bool = False
    mac: bool = False
    linux: bool = False

    @classmethod
    def from_mapping(cls, flags: Optional[Dict[str, Any]]) -> "Platforms":
        flags = flags or {}
        return cls(
            windows=bool(flags.get('windows')),
            mac=bool(flags.get('mac')),
            linux=bool(flags.get('linux')),
        )


@dataclass(frozen=True)
class PackageRecord:
    """A purchasable sub-package of an app; `price` is in currency units, not cents."""
    id: Optional[int]
    title: Optional[str]
    price: Optional[float]
    discount: Optional[int]


@dataclass(frozen=True)
class StoreRecord:
    """
    The normalized Storefront API payload for one app.

    Instances are never mutated: a refresh builds a new record. `dlc` only
    ever holds bare ids; names for those ids come from the SteamDB page and
    live in the reconciled DLC list instead.

    Attributes:
        app_id (str): The Steam App ID the record was fetched for.
        name (Optional[str]): Display name.
        type (Optional[str]): Product type reported by Steam ('game', 'dlc', ...).
        release_date (Optional[str]): Release date string exactly as Steam reports it.
        is_released (bool): True only when Steam reports `coming_soon` as false.
        price_overview (Optional[Dict]): A copy of the raw `price_overview` block; left out of the hash.
        developers (Tuple[str, ...]): Developer names.
        publishers (Tuple[str, ...]): Publisher names.
        platforms (Platforms): Windows/Mac/Linux support flags.
        dlc (Tuple[str, ...]): DLC App IDs as strings.
        packages (Tuple[PackageRecord, ...]): Sub-packages flattened out of the package groups.
        fetched_at (str): ISO-8601 timestamp of the successful fetch.
    """
    app_id: str
    name: Optional[str] = None
    type: Optional[str] = None
    release_date: Optional[str] = None
    is_released: bool = False
    price_overview: Optional[Dict[str, Any]] = field(default=None, hash=False)  # own copy, not the payload's dict
    developers: Tuple[str, ...] = ()
    publishers: Tuple[str, ...] = ()
    platforms: Platforms = field(default_factory=Platforms)
    dlc: Tuple[str, ...] = ()
    packages: Tuple[PackageRecord, ...] = ()
    fetched_at: str = ""

    @property
    def price(self) -> str:
        """The pre-formatted final price, or 'Unavailable' when Steam has none."""
        if self.price_overview and self.price_overview.get('final_formatted'):
            return self.price_overview['final_formatted']
        return "Unavailable"

    def to_dict(self) -> Dict[str, Any]:
        """Returns a JSON-compatible dict (tuples become lists)."""
        data = asdict(self)
        data['developers'] = list(self.developers)
        data['publishers'] = list(self.publishers)
        data['dlc'] = list(self.dlc)
        data['packages'] = [asdict(package) for package in self.packages]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreRecord":
        """Rebuilds a record from the output of `to_dict`."""
        return cls(
            app_id=str(data['app_id']),
            name=data.get('name'),
            type=data.get('type'),
            release_date=data.get('release_date'),
            is_released=bool(data.get('is_released')),
            price_overview=dict(data['price_overview']) if data.get('price_overview') else None,
            developers=tuple(data.get('developers') or ()),
            publishers=tuple(data.get('publishers') or ()),
            platforms=Platforms.from_mapping(data.get('platforms')),
            dlc=tuple(str(dlc_id) for dlc_id in data.get('dlc') or ()),
            packages=tuple(PackageRecord(**package) for package in data.get('packages') or ()),
            fetched_at=data.get('fetched_at', ""),
        )


@dataclass(frozen=True)
class DlcRecord:
    id: str
    name: str


@dataclass(frozen=True)
class AchievementRecord:
    name: str  # internal API name, the unique key
    display_name: str
    description: str = ""
    icon: str = ""
    icon_gray: str = ""


@dataclass(frozen=True)
class DepotRecord:
    id: str
    name: str
    manifests: str = ""
    os_list: str = ""


@dataclass(frozen=True)
class PageSnapshot:
    """Everything the scraper read from one state of a SteamDB page."""
    dlc: Tuple[DlcRecord, ...] = ()
    achievements: Tuple[AchievementRecord, ...] = ()
    depots: Tuple[DepotRecord, ...] = ()


@dataclass(frozen=True)
class ToolkitState:
    """
    What the display surface renders after a refresh.

    Attributes:
        app_id (str): The subject App ID.
        record (Optional[StoreRecord]): The normalized API record, None on failure.
        dlc (Tuple[DlcRecord, ...]): Reconciled DLC list.
        achievements (Tuple[AchievementRecord, ...]): Scraped achievements.
        depots (Tuple[DepotRecord, ...]): Scraped depots.
        error (Optional[str]): Human-readable failure message; a retry is always possible.
        superseded (bool): True when a newer refresh cancelled this one.
    """
    app_id: str
    record: Optional[StoreRecord] = None
    dlc: Tuple[DlcRecord, ...] = ()
    achievements: Tuple[AchievementRecord, ...] = ()
    depots: Tuple[DepotRecord, ...] = ()
    error: Optional[str] = None
    superseded: bool = False
