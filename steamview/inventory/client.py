"""
Read-only client for the Steam Community inventory endpoint.

One unauthenticated GET per profile view. No caching, no pagination, no retries:
any failure degrades to an empty inventory.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests
from pydantic import ValidationError

from steamview.config import AppConfig
from steamview.inventory.models import InventoryItem

logger = logging.getLogger(__name__)

STEAM_INVENTORY_URL = "https://steamcommunity.com/inventory/{steamid}/{app_id}/{context_id}"
USER_AGENT = "steamview/0.1 (+https://steamcommunity.com)"


def inventory_url(cfg: AppConfig, steamid: str) -> str:
    return STEAM_INVENTORY_URL.format(
        steamid=steamid, app_id=cfg.inventory_app_id, context_id=cfg.inventory_context_id
    )


def _get_inventory_payload(cfg: AppConfig, steamid: str) -> Dict[str, Any]:
    r = requests.get(
        inventory_url(cfg, steamid),
        params={"l": "english", "count": cfg.inventory_count},
        headers={"User-Agent": USER_AGENT},
        timeout=cfg.outbound_timeout_seconds,
    )
    r.raise_for_status()
    data = r.json()
    if not isinstance(data, dict):
        raise ValueError("Invalid inventory response")
    # Empty inventories come back as {"total_inventory_count": 0, "success": 1} with no lists.
    if not data.get("success"):
        raise ValueError("Inventory endpoint reported failure")
    return data


def fetch_inventory(cfg: AppConfig, steamid: str) -> List[InventoryItem]:
    """
    Fetch the item descriptors for `steamid`.

    Returns an empty list on any fetch or decode failure; the cause is logged here.
    """
    try:
        data = _get_inventory_payload(cfg, steamid)
        raw_items = data.get("descriptions") or []
        if not isinstance(raw_items, list):
            raise ValueError("Inventory descriptions is not a list")
        items = [InventoryItem.model_validate(x) for x in raw_items if isinstance(x, dict)]
    except requests.RequestException as e:
        logger.warning("Inventory fetch failed for %s: %s", steamid, str(e))
        return []
    except (ValueError, ValidationError) as e:
        # requests' JSONDecodeError is a ValueError too.
        logger.warning("Inventory payload unusable for %s: %s", steamid, str(e))
        return []

    logger.debug("Fetched %d inventory items for %s", len(items), steamid)
    return items
