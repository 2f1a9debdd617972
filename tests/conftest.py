"""
Pytest config.

Pin the repo root on sys.path so `import steamview` works even when the package is not
installed (e.g. when invoking a global `pytest` entrypoint).
"""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()

STEAMID = "76561198000000000"
OTHER_STEAMID = "76561198000000001"
TEST_SECRET = "test-secret-key-for-testing-purposes-only"


@pytest.fixture
def cfg():
    """Development config with a signing secret and API key; no env involved."""
    from steamview.config import AppConfig

    return AppConfig(
        session_secret=TEST_SECRET,
        app_url="http://localhost:3000",
        steam_api_key="test-api-key",
        environment="development",
        host="127.0.0.1",
        port=3000,
        log_level="debug",
        inventory_app_id=730,
        inventory_context_id=2,
        inventory_count=2000,
        outbound_timeout_seconds=5.0,
    )


@pytest.fixture
def prod_cfg(cfg):
    return replace(cfg, environment="production", app_url="https://inventory.example.com")


@pytest.fixture
def principal():
    from steamview.auth.models import Principal

    return Principal(
        steamid=STEAMID,
        display_name="gaben",
        avatar_url="https://avatars.steamstatic.com/abc_medium.jpg",
        profile_url=f"https://steamcommunity.com/profiles/{STEAMID}/",
        persona_state=1,
        real_name="Gabe",
    )


def make_item(
    name: str = "AK-47 | Redline",
    *,
    rarity: str | None = "Covert",
    descriptions: List[Dict[str, Any]] | None = None,
    icon_url: str = "icon-fragment",
) -> Dict[str, Any]:
    """Inventory `descriptions` entry shaped like the Steam Community endpoint's."""
    tags: List[Dict[str, Any]] = [
        {
            "category": "Type",
            "internal_name": "CSGO_Type_Rifle",
            "localized_category_name": "Type",
            "localized_tag_name": "Rifle",
        }
    ]
    if rarity is not None:
        tags.append(
            {
                "category": "Rarity",
                "internal_name": "Rarity_Ancient_Weapon",
                "localized_category_name": "Quality",
                "localized_tag_name": rarity,
                "color": "eb4b4b",
            }
        )
    return {
        "appid": 730,
        "classid": "310776",
        "instanceid": "302028390",
        "name": name,
        "market_hash_name": f"{name} (Factory New)",
        "icon_url": icon_url,
        "type": "Covert Rifle",
        "descriptions": descriptions
        if descriptions is not None
        else [{"type": "html", "value": "Exterior: Factory New"}],
        "tags": tags,
    }
