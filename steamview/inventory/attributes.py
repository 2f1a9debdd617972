"""
Per-item display attributes derived from inventory descriptors.

Rarity comes from the classification tags; wear, exterior, flavor text and collection
are heuristic extractions from the free-text description lines. Every lookup here
is total: missing data yields a default, never an error.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from steamview.inventory.models import InventoryItem, ItemTag

DEFAULT_RARITY = "Consumer Grade"
DEFAULT_COLOR = "#b0c3d9"

RARITY_COLORS: Dict[str, str] = {
    "Consumer Grade": "#b0c3d9",
    "Industrial Grade": "#5e98d9",
    "Mil-Spec Grade": "#4b69ff",
    "Restricted": "#8847ff",
    "Classified": "#d32ce6",
    "Covert": "#eb4b4b",
    "Contraband": "#e4ae39",
    "Extraordinary": "#eb4b4b",
    # Non-weapon items (stickers, agents, patches) use these names.
    "Base Grade": "#b0c3d9",
    "High Grade": "#4b69ff",
    "Remarkable": "#8847ff",
    "Exotic": "#d32ce6",
}

_RARITY_ALIASES: Dict[str, str] = {
    "Mil-Spec": "Mil-Spec Grade",
}

# Order matters: first tier found in the description text wins.
WEAR_TIERS: List[Tuple[str, str]] = [
    ("Factory New", "#4b69ff"),
    ("Minimal Wear", "#5e98d9"),
    ("Field-Tested", "#8bc34a"),
    ("Well-Worn", "#f0ad4e"),
    ("Battle-Scarred", "#d9534f"),
]

COLLECTION_COLOR_CODE = "9da1a9"

_TAG_RE = re.compile(r"<[^>]+>")


def _strip_markup(value: str) -> str:
    return _TAG_RE.sub("", value or "").strip()


def _normalize_color(color: Optional[str]) -> Optional[str]:
    c = (color or "").strip().lstrip("#").lower()
    if re.fullmatch(r"[0-9a-f]{6}", c):
        return f"#{c}"
    return None


def find_rarity_tag(item: InventoryItem) -> Optional[ItemTag]:
    for tag in item.tags:
        if tag.category == "Rarity" or tag.localized_category_name == "Rarity":
            return tag
    return None


def rarity_of(item: InventoryItem) -> Tuple[str, str]:
    """Return (rarity name, hex color); defaults to Consumer Grade / gray."""
    tag = find_rarity_tag(item)
    if tag is None:
        return DEFAULT_RARITY, DEFAULT_COLOR
    name = tag.localized_tag_name.strip() or DEFAULT_RARITY
    name = _RARITY_ALIASES.get(name, name)
    color = RARITY_COLORS.get(name) or _normalize_color(tag.color) or DEFAULT_COLOR
    return name, color


def wear_of(item: InventoryItem) -> Tuple[Optional[str], str]:
    """Return (wear tier or None, hex color)."""
    texts = item.description_values()
    for tier, color in WEAR_TIERS:
        if any(tier in text for text in texts):
            return tier, color
    return None, DEFAULT_COLOR


def exterior_of(item: InventoryItem) -> Optional[str]:
    for text in item.description_values():
        if "Exterior:" in text:
            value = _strip_markup(text.split("Exterior:", 1)[1])
            return value or None
    return None


def flavor_text_of(item: InventoryItem) -> Optional[str]:
    for text in item.description_values():
        s = _strip_markup(text)
        if len(s) >= 2 and s.startswith('"') and s.endswith('"'):
            inner = s[1:-1].strip()
            if inner:
                return inner
    return None


def collection_of(item: InventoryItem) -> Optional[str]:
    for line in item.descriptions:
        if _normalize_color(line.color) == f"#{COLLECTION_COLOR_CODE}" or COLLECTION_COLOR_CODE in line.value:
            name = _strip_markup(line.value)
            if name:
                return name
    return None


def icon_src(item: InventoryItem, size: str = "128fx128f") -> Optional[str]:
    if not item.icon_url:
        return None
    return f"https://community.cloudflare.steamstatic.com/economy/image/{item.icon_url}/{size}"
