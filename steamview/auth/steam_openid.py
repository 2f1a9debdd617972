"""
Steam sign-in (OpenID 2.0) and profile lookup.

Steam only speaks OpenID 2.0 with `identifier_select`; the assertion is verified
statelessly by echoing the signed fields back with `openid.mode=check_authentication`.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import requests

from steamview.config import AppConfig

STEAM_OPENID_URL = "https://steamcommunity.com/openid/login"
STEAM_PLAYER_SUMMARIES_URL = "https://api.steampowered.com/ISteamUser/GetPlayerSummaries/v0002/"

OPENID_NS = "http://specs.openid.net/auth/2.0"
OPENID_IDENTIFIER_SELECT = "http://specs.openid.net/auth/2.0/identifier_select"

_CLAIMED_ID_RE = re.compile(r"^https?://steamcommunity\.com/openid/id/(\d{1,20})/?$")

# Fields the provider must have covered with its signature.
REQUIRED_SIGNED_FIELDS = ("claimed_id", "identity", "return_to", "op_endpoint", "response_nonce", "assoc_handle")


class SteamAuthError(ValueError):
    """The OpenID assertion or the profile lookup could not be trusted."""


def build_login_url(cfg: AppConfig) -> str:
    """Build the `checkid_setup` redirect to Steam's OpenID endpoint."""
    if not cfg.app_url:
        raise ValueError("APP_URL not configured")
    params = {
        "openid.ns": OPENID_NS,
        "openid.mode": "checkid_setup",
        "openid.return_to": cfg.return_url,
        "openid.realm": cfg.app_url,
        "openid.identity": OPENID_IDENTIFIER_SELECT,
        "openid.claimed_id": OPENID_IDENTIFIER_SELECT,
    }
    return f"{STEAM_OPENID_URL}?{urlencode(params)}"


def extract_steamid(claimed_id: Optional[str]) -> str:
    m = _CLAIMED_ID_RE.match((claimed_id or "").strip())
    if not m:
        raise SteamAuthError("Malformed claimed_id")
    return m.group(1)


def verify_assertion(cfg: AppConfig, params: Mapping[str, str]) -> str:
    """
    Verify a positive assertion from the callback query string.

    Returns the 64-bit SteamID as a string; raises SteamAuthError on anything else.
    Network failures surface as `requests.RequestException`.
    """
    mode = str(params.get("openid.mode") or "")
    if mode != "id_res":
        raise SteamAuthError(f"Unexpected openid.mode={mode or '<missing>'}")

    return_to = str(params.get("openid.return_to") or "")
    if not return_to.startswith(cfg.return_url):
        raise SteamAuthError("return_to mismatch")

    if params.get("openid.op_endpoint") != STEAM_OPENID_URL:
        raise SteamAuthError("Unexpected op_endpoint")

    signed = {f.strip() for f in str(params.get("openid.signed") or "").split(",") if f.strip()}
    missing = [f for f in REQUIRED_SIGNED_FIELDS if f not in signed]
    if missing:
        raise SteamAuthError(f"Unsigned assertion fields: {','.join(missing)}")

    claimed_id = params.get("openid.claimed_id")
    if params.get("openid.identity") != claimed_id:
        raise SteamAuthError("identity does not match claimed_id")
    steamid = extract_steamid(claimed_id)

    payload: Dict[str, str] = {k: str(v) for k, v in params.items() if k.startswith("openid.")}
    payload["openid.mode"] = "check_authentication"
    r = requests.post(STEAM_OPENID_URL, data=payload, timeout=cfg.outbound_timeout_seconds)
    r.raise_for_status()

    # Key-value form: one `key:value` per line.
    fields = {}
    for line in r.text.splitlines():
        key, sep, value = line.partition(":")
        if sep:
            fields[key.strip()] = value.strip()
    if fields.get("is_valid") != "true":
        raise SteamAuthError("Assertion rejected by provider")
    return steamid


def fetch_player_summary(cfg: AppConfig, steamid: str) -> Dict[str, Any]:
    """
    Fetch the public profile for `steamid` from the Steam Web API.
    """
    if not cfg.steam_api_key:
        raise SteamAuthError("STEAM_API_KEY not configured")
    r = requests.get(
        STEAM_PLAYER_SUMMARIES_URL,
        params={"key": cfg.steam_api_key, "steamids": steamid},
        timeout=cfg.outbound_timeout_seconds,
    )
    if r.status_code >= 400:
        # Avoid echoing the request URL: it carries the API key.
        raise SteamAuthError(f"Player summary lookup failed (status={r.status_code})")
    data = r.json()
    if not isinstance(data, dict):
        raise ValueError("Invalid player summary response")
    response = data.get("response")
    players = response.get("players") if isinstance(response, dict) else None
    if not isinstance(players, list):
        raise ValueError("Invalid player summary response")
    for player in players:
        if isinstance(player, dict) and str(player.get("steamid") or "") == steamid:
            return player
    raise SteamAuthError("Player not found")
