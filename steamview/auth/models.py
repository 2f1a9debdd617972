from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

DEFAULT_AVATAR_URL = "/static/default-avatar.svg"

PLAYER_STATES: Dict[int, str] = {
    0: "Offline",
    1: "Online",
    2: "Busy",
    3: "Away",
    4: "Snooze",
    5: "Looking to Trade",
    6: "Looking to Play",
}


def player_status(state: Any) -> str:
    """Human label for a Steam `personastate` value (0-6); anything else is "Unknown"."""
    try:
        return PLAYER_STATES.get(int(state), "Unknown")
    except (TypeError, ValueError):
        return "Unknown"


def https_avatar(url: Optional[str]) -> str:
    if not url:
        return DEFAULT_AVATAR_URL
    return url.replace("http://", "https://", 1)


@dataclass(frozen=True)
class Principal:
    """Authenticated Steam user, as held in the session cookie."""

    steamid: str
    display_name: str
    avatar_url: str = DEFAULT_AVATAR_URL
    profile_url: Optional[str] = None
    persona_state: int = 0
    real_name: Optional[str] = None

    @property
    def status(self) -> str:
        return player_status(self.persona_state)

    @classmethod
    def from_player_summary(cls, steamid: str, summary: Dict[str, Any]) -> "Principal":
        """
        Build a principal from a `GetPlayerSummaries` player entry.

        `steamid` is the identifier verified through OpenID; the summary only supplies
        display fields and never overrides it.
        """
        try:
            state = int(summary.get("personastate") or 0)
        except (TypeError, ValueError):
            state = 0
        return cls(
            steamid=steamid,
            display_name=str(summary.get("personaname") or "").strip() or steamid,
            avatar_url=https_avatar(summary.get("avatarmedium") or summary.get("avatar")),
            profile_url=str(summary.get("profileurl") or "").strip()
            or f"https://steamcommunity.com/profiles/{steamid}",
            persona_state=state,
            real_name=str(summary.get("realname") or "").strip() or None,
        )
