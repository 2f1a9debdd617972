from __future__ import annotations

from dataclasses import replace

from steamview.auth.models import DEFAULT_AVATAR_URL, Principal
from steamview.auth.session import (
    clear_session_cookie_kwargs,
    decode_session,
    encode_session,
    session_cookie_kwargs,
    session_cookie_name,
)


def test_session_round_trip(cfg, principal) -> None:
    value = encode_session(cfg, principal)
    assert value
    assert decode_session(cfg, value) == principal


def test_tampered_cookie_is_anonymous(cfg, principal) -> None:
    value = encode_session(cfg, principal)
    assert decode_session(cfg, value[:-2] + ("A" if value[-2] != "A" else "B") + value[-1]) is None


def test_foreign_secret_is_anonymous(cfg, principal) -> None:
    value = encode_session(replace(cfg, session_secret="some-other-secret"), principal)
    assert decode_session(cfg, value) is None


def test_missing_secret_cannot_sign_or_verify(cfg, principal) -> None:
    unsigned = replace(cfg, session_secret=None)
    assert encode_session(unsigned, principal) is None
    assert decode_session(unsigned, encode_session(cfg, principal)) is None


def test_empty_cookie_is_anonymous(cfg) -> None:
    assert decode_session(cfg, None) is None
    assert decode_session(cfg, "") is None


def test_non_numeric_steamid_payload_is_rejected(cfg) -> None:
    bogus = Principal(steamid="not-a-number", display_name="x")
    assert decode_session(cfg, encode_session(cfg, bogus)) is None


def test_optional_fields_survive_as_none(cfg) -> None:
    p = Principal(steamid="76561198000000002", display_name="anon")
    decoded = decode_session(cfg, encode_session(cfg, p))
    assert decoded is not None
    assert decoded.real_name is None
    assert decoded.profile_url is None
    assert decoded.avatar_url == DEFAULT_AVATAR_URL


def test_cookie_flags_follow_environment(cfg, prod_cfg) -> None:
    dev = session_cookie_kwargs(cfg, "v")
    assert dev["key"] == "steamview_session"
    assert dev["httponly"] is True
    assert dev["secure"] is False
    assert dev["max_age"] == 24 * 60 * 60

    prod = session_cookie_kwargs(prod_cfg, "v")
    assert prod["key"] == "__Host-steamview_session"
    assert prod["secure"] is True
    assert prod["path"] == "/"


def test_clear_cookie_expires_immediately(cfg) -> None:
    kwargs = clear_session_cookie_kwargs(cfg)
    assert kwargs["key"] == session_cookie_name(cfg)
    assert kwargs["max_age"] == 0
    assert kwargs["value"] == ""
