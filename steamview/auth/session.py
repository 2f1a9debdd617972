from __future__ import annotations

import json
from dataclasses import asdict
from typing import Optional

from itsdangerous import BadSignature, BadTimeSignature, URLSafeTimedSerializer

from steamview.auth.models import DEFAULT_AVATAR_URL, Principal
from steamview.config import AppConfig


def session_cookie_name(cfg: AppConfig) -> str:
    # `__Host-` requires Secure + Path=/ + no Domain; browsers may reject it on HTTP.
    return "__Host-steamview_session" if cfg.cookie_secure else "steamview_session"


SESSION_SALT = "steamview-session-v1"


def _serializer(cfg: AppConfig) -> Optional[URLSafeTimedSerializer]:
    if not cfg.session_secret:
        return None
    return URLSafeTimedSerializer(secret_key=cfg.session_secret, salt=SESSION_SALT)


def encode_session(cfg: AppConfig, principal: Principal) -> Optional[str]:
    s = _serializer(cfg)
    if s is None:
        return None
    payload = asdict(principal)
    raw = json.dumps(payload, separators=(",", ":"), sort_keys=True)
    return s.dumps(raw)


def decode_session(cfg: AppConfig, value: str | None) -> Optional[Principal]:
    if not value:
        return None
    s = _serializer(cfg)
    if s is None:
        return None
    try:
        raw = s.loads(value, max_age=cfg.session_ttl_seconds)
        data = json.loads(raw)
        if not isinstance(data, dict):
            return None
        steamid = str(data.get("steamid") or "").strip()
        if not steamid.isdigit():
            return None
        profile_url = data.get("profile_url")
        real_name = data.get("real_name")
        return Principal(
            steamid=steamid,
            display_name=str(data.get("display_name") or steamid),
            avatar_url=str(data.get("avatar_url") or DEFAULT_AVATAR_URL),
            profile_url=str(profile_url) if profile_url else None,
            persona_state=int(data.get("persona_state") or 0),
            real_name=str(real_name) if real_name else None,
        )
    except (BadSignature, BadTimeSignature, ValueError, TypeError):
        return None


def clear_session_cookie_kwargs(cfg: AppConfig) -> dict:
    return {
        "key": session_cookie_name(cfg),
        "value": "",
        "max_age": 0,
        "httponly": True,
        "secure": cfg.cookie_secure,
        "samesite": "lax",
        "path": "/",
    }


def session_cookie_kwargs(cfg: AppConfig, value: str) -> dict:
    return {
        "key": session_cookie_name(cfg),
        "value": value,
        "max_age": cfg.session_ttl_seconds,
        "httponly": True,
        "secure": cfg.cookie_secure,
        "samesite": "lax",
        "path": "/",
    }
