"""
Data models for the entity graph.

Entities are typed records with a small set of known optional fields plus an
open ``extra`` mapping for ad hoc stage fields. Serialization is sparse:
optional fields that do not apply are left out of ``to_dict`` entirely.

Source records (levels, markers, shop listings) are read-only views over
table rows and are never serialized.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..game_data.models import RawRow

ITEM_KIND = "item"
NPC_KIND = "npc"
LOCATION_KIND = "location"


def _localized_dict(localized: Dict[str, Dict[str, str]]) -> Dict[str, Any]:
    return {locale: dict(fields) for locale, fields in localized.items() if fields}


# =============================================================================
# Graph Entities
# =============================================================================

@dataclass(eq=False)
class Item:
    """An item of the graph, identified by its table key.

    Compared by identity: two Item objects are the same entity only if they
    are the same object.
    """
    id: Any
    localized: Dict[str, Dict[str, str]] = field(default_factory=dict)
    vendors: List[Any] = field(default_factory=list)
    upgrades: List[Any] = field(default_factory=list)
    downgrades: List[Any] = field(default_factory=list)
    icon: Optional[int] = None
    patch: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    kind = ITEM_KIND

    def name(self, locale: str = "en") -> Optional[str]:
        return self.localized.get(locale, {}).get("name")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id}
        data.update(_localized_dict(self.localized))
        if self.patch is not None:
            data["patch"] = self.patch
        if self.icon is not None:
            data["icon"] = self.icon
        if self.vendors:
            data["vendors"] = list(self.vendors)
        if self.upgrades:
            data["upgrades"] = list(self.upgrades)
        if self.downgrades:
            data["downgrades"] = list(self.downgrades)
        data.update(self.extra)
        return data


@dataclass(eq=False)
class Npc:
    """An NPC of the graph.

    ``approx`` marks coordinates that came from the secondary index rather
    than an authoritative spawn level.
    """
    id: Any
    localized: Dict[str, Dict[str, str]] = field(default_factory=dict)
    patch: Optional[str] = None
    title: Optional[str] = None
    zoneid: Optional[int] = None
    coords: Optional[List[float]] = None
    approx: bool = False
    areaid: Optional[int] = None
    shops: Optional[List["Shop"]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    kind = NPC_KIND

    def name(self, locale: str = "en") -> Optional[str]:
        return self.localized.get(locale, {}).get("name")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id}
        data.update(_localized_dict(self.localized))
        if self.patch is not None:
            data["patch"] = self.patch
        if self.title:
            data["title"] = self.title
        if self.zoneid is not None:
            data["zoneid"] = self.zoneid
        if self.coords is not None:
            data["coords"] = list(self.coords)
        if self.approx:
            data["approx"] = 1
        if self.areaid is not None:
            data["areaid"] = self.areaid
        if self.shops:
            data["shops"] = [shop.to_dict() for shop in self.shops]
        data.update(self.extra)
        return data


@dataclass
class ShopListingItem:
    """One side of a trade: an item id and an amount."""
    id: Any
    amount: int
    hq: bool = False
    collectability: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "amount": self.amount}
        if self.hq:
            data["hq"] = 1
        if self.collectability > 0:
            data["collectability"] = self.collectability
        return data


@dataclass
class ShopEntry:
    """A trade record: what is received for what is paid."""
    item: List[ShopListingItem] = field(default_factory=list)
    currency: List[ShopListingItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item": [listing.to_dict() for listing in self.item],
            "currency": [listing.to_dict() for listing in self.currency],
        }


@dataclass(eq=False)
class Shop:
    """A named shop. Entries are item ids (gil shops) or ShopEntry trades."""
    name: str
    entries: List[Union[Any, ShopEntry]] = field(default_factory=list)
    trade: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "entries": [
                entry.to_dict() if isinstance(entry, ShopEntry) else entry
                for entry in self.entries
            ],
        }
        if self.trade:
            data["trade"] = 1
        return data


@dataclass(frozen=True)
class BossCurrencyEntry:
    """An amount of a currency item dropped by a mob."""
    amount: int
    id: int

    def to_dict(self) -> Dict[str, int]:
        return {"amount": self.amount, "id": self.id}


@dataclass
class Reference:
    """A directed edge from an entity (or from nowhere) to a target id."""
    source_kind: Optional[str]
    source_id: Any
    kind: str
    target_id: Any
    is_primary: bool = False

    @property
    def key(self) -> tuple[Optional[str], Any, str, Any]:
        return (self.source_kind, self.source_id, self.kind, self.target_id)


# =============================================================================
# Source Records
# =============================================================================

@dataclass(frozen=True)
class LocationInfo:
    """Place name of a map."""
    map_id: int
    place_name_id: int

    @classmethod
    def from_row(cls, row: RawRow) -> "LocationInfo":
        return cls(map_id=int(row["id"]), place_name_id=int(row["place_name"]))


@dataclass(frozen=True)
class Level:
    """A spawn point in map coordinates, optionally bound to an object."""
    id: int
    map_id: int
    x: float
    y: float
    object_id: Optional[int] = None

    @classmethod
    def from_row(cls, row: RawRow) -> "Level":
        object_id = row.get("object")
        return cls(
            id=int(row["id"]),
            map_id=int(row["map"]),
            x=float(row["x"]),
            y=float(row["y"]),
            object_id=int(object_id) if object_id is not None else None,
        )


@dataclass(frozen=True)
class MapMarker:
    """A labeled point on a map, in map coordinates."""
    map_id: int
    place_name_id: int
    x: float
    y: float

    @classmethod
    def from_row(cls, row: RawRow) -> "MapMarker":
        return cls(
            map_id=int(row["map"]),
            place_name_id=int(row["place_name"]),
            x=float(row["x"]),
            y=float(row["y"]),
        )


@dataclass(frozen=True)
class SourceListingItem:
    """An item reference inside a source shop listing."""
    item_id: Any
    count: int = 1
    is_hq: bool = False
    collectability_rating: int = 0

    @classmethod
    def from_row(cls, row: RawRow) -> "SourceListingItem":
        return cls(
            item_id=row["item"],
            count=int(row.get("count", 1) or 0),
            is_hq=bool(row.get("hq", False)),
            collectability_rating=int(row.get("collectability", 0) or 0),
        )


@dataclass(frozen=True)
class SourceListing:
    """A source shop listing: rewards and what they cost."""
    rewards: tuple[SourceListingItem, ...] = ()
    costs: tuple[SourceListingItem, ...] = ()

    @classmethod
    def from_row(cls, row: RawRow) -> "SourceListing":
        return cls(
            rewards=tuple(SourceListingItem.from_row(r) for r in row.get("rewards", [])),
            costs=tuple(SourceListingItem.from_row(c) for c in row.get("costs", [])),
        )


def _npc_ref(value: Any) -> Union[int, str]:
    """NPC reference of a shop row: a numeric id, or a display name."""
    text = str(value).strip()
    return int(text) if text.lstrip("-").isdigit() else text


@dataclass(frozen=True)
class SourceShop:
    """A shop as exported in the tables, with the NPCs that run it.

    Each NPC reference is an id, or a name for tables that only
    export resident names.
    """
    id: Any
    name: str
    npc_ids: tuple[Union[int, str], ...] = ()
    listings: tuple[SourceListing, ...] = ()

    @classmethod
    def from_row(cls, row: RawRow) -> "SourceShop":
        return cls(
            id=row.get("id"),
            name=str(row.get("name") or ""),
            npc_ids=tuple(_npc_ref(n) for n in row.get("npcs", [])),
            listings=tuple(SourceListing.from_row(listing) for listing in row.get("listings", [])),
        )

    @property
    def reward_items(self) -> List[SourceListingItem]:
        """Every reward item across all listings, in listing order."""
        return [reward for listing in self.listings for reward in listing.rewards]
