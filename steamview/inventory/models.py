from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _as_opt_str(v: Any) -> Optional[str]:
    return None if v is None else str(v)


def _as_list(v: Any) -> list:
    return v if isinstance(v, list) else []


class ItemDescriptionLine(BaseModel):
    """One free-text line of an item's `descriptions` array."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(default="")
    value: str = Field(default="")
    color: Optional[str] = None

    @field_validator("type", "value", mode="before")
    @classmethod
    def _coerce_str(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("color", mode="before")
    @classmethod
    def _coerce_color(cls, v: Any) -> Optional[str]:
        return _as_opt_str(v)


class ItemTag(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category: str = Field(default="")
    internal_name: str = Field(default="")
    localized_category_name: str = Field(default="")
    localized_tag_name: str = Field(default="")
    color: Optional[str] = None

    @field_validator(
        "category", "internal_name", "localized_category_name", "localized_tag_name", mode="before"
    )
    @classmethod
    def _coerce_str(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("color", mode="before")
    @classmethod
    def _coerce_color(cls, v: Any) -> Optional[str]:
        return _as_opt_str(v)


class InventoryItem(BaseModel):
    """
    Item descriptor as returned in the inventory endpoint's `descriptions` list.

    Only the fields the viewer renders are kept; everything else is ignored.
    """

    model_config = ConfigDict(extra="ignore")

    classid: str = Field(default="")
    instanceid: str = Field(default="0")
    name: str = Field(default="")
    market_hash_name: str = Field(default="")
    icon_url: str = Field(default="")
    type: str = Field(default="")
    descriptions: List[ItemDescriptionLine] = Field(default_factory=list)
    tags: List[ItemTag] = Field(default_factory=list)

    @field_validator("classid", "instanceid", "name", "market_hash_name", "icon_url", "type", mode="before")
    @classmethod
    def _coerce_str(cls, v: Any) -> str:
        return _as_str(v)

    @field_validator("descriptions", "tags", mode="before")
    @classmethod
    def _coerce_list(cls, v: Any) -> list:
        return [x for x in _as_list(v) if isinstance(x, dict)]

    @property
    def display_name(self) -> str:
        return self.name or self.market_hash_name or "Unknown item"

    def description_values(self) -> List[str]:
        return [d.value for d in self.descriptions if d.value]
