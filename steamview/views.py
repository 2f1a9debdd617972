"""
View models for the server-rendered pages.

Templates only ever see these records. `ProfileView.client_payload()` is the single
boundary between server state and the client-side detail view: it is serialized into a
JSON data island and read by `static/inventory.js`.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from steamview.auth.models import Principal
from steamview.inventory import attributes
from steamview.inventory.models import InventoryItem


@dataclass(frozen=True)
class ItemView:
    index: int
    name: str
    market_hash_name: str
    icon: Optional[str]
    rarity: str
    rarity_color: str
    wear: Optional[str]
    wear_color: str
    exterior: Optional[str]
    description: Optional[str]
    collection: Optional[str]
    type: str = ""
    tags: List[str] = field(default_factory=list)

    def to_client(self) -> Dict[str, Any]:
        return asdict(self)


def build_item_view(index: int, item: InventoryItem) -> ItemView:
    rarity, rarity_color = attributes.rarity_of(item)
    wear, wear_color = attributes.wear_of(item)
    return ItemView(
        index=index,
        name=item.display_name,
        market_hash_name=item.market_hash_name,
        icon=attributes.icon_src(item),
        rarity=rarity,
        rarity_color=rarity_color,
        wear=wear,
        wear_color=wear_color,
        exterior=attributes.exterior_of(item),
        description=attributes.flavor_text_of(item),
        collection=attributes.collection_of(item),
        type=item.type,
        tags=[t.localized_tag_name for t in item.tags if t.localized_tag_name],
    )


@dataclass(frozen=True)
class ProfileView:
    principal: Principal
    items: List[ItemView]
    show_debug: bool = False

    @property
    def title(self) -> str:
        return f"{self.principal.display_name}'s Profile"

    @property
    def has_items(self) -> bool:
        return bool(self.items)

    def client_payload(self) -> Dict[str, Any]:
        return {
            "steamid": self.principal.steamid,
            "items": [item.to_client() for item in self.items],
        }

    def debug_payload(self) -> Dict[str, Any]:
        return {"principal": asdict(self.principal), "itemCount": len(self.items)}


def build_profile_view(principal: Principal, items: List[InventoryItem], *, show_debug: bool = False) -> ProfileView:
    return ProfileView(
        principal=principal,
        items=[build_item_view(i, item) for i, item in enumerate(items)],
        show_debug=show_debug,
    )
