from __future__ import annotations

import dataclasses

import pytest

from steamview.auth.models import DEFAULT_AVATAR_URL, Principal, player_status


@pytest.mark.parametrize(
    "state,label",
    [(0, "Offline"), (1, "Online"), (2, "Busy"), (3, "Away"), (4, "Snooze"), (5, "Looking to Trade"), (6, "Looking to Play")],
)
def test_player_status_labels(state, label) -> None:
    assert player_status(state) == label


@pytest.mark.parametrize("state", [7, -1, None, "x"])
def test_player_status_unknown(state) -> None:
    assert player_status(state) == "Unknown"


def test_from_player_summary_builds_principal() -> None:
    summary = {
        "steamid": "76561198000000000",
        "personaname": "gaben",
        "profileurl": "https://steamcommunity.com/id/gaben/",
        "avatarmedium": "http://avatars.steamstatic.com/abc_medium.jpg",
        "personastate": 3,
        "realname": "Gabe Newell",
    }
    p = Principal.from_player_summary("76561198000000000", summary)
    assert p.steamid == "76561198000000000"
    assert p.display_name == "gaben"
    assert p.avatar_url == "https://avatars.steamstatic.com/abc_medium.jpg"
    assert p.profile_url == "https://steamcommunity.com/id/gaben/"
    assert p.status == "Away"
    assert p.real_name == "Gabe Newell"


def test_from_player_summary_defaults() -> None:
    p = Principal.from_player_summary("76561198000000000", {"steamid": "76561198000000000"})
    assert p.display_name == "76561198000000000"
    assert p.avatar_url == DEFAULT_AVATAR_URL
    assert p.profile_url == "https://steamcommunity.com/profiles/76561198000000000"
    assert p.persona_state == 0
    assert p.real_name is None


def test_verified_steamid_wins_over_summary() -> None:
    p = Principal.from_player_summary("76561198000000000", {"steamid": "1", "personaname": "x"})
    assert p.steamid == "76561198000000000"


def test_principal_is_immutable(principal) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        principal.steamid = "1"  # type: ignore[misc]
