from __future__ import annotations

from typing import Optional

from fastapi import Request

from steamview.auth.models import Principal
from steamview.auth.session import decode_session, session_cookie_name
from steamview.config import AppConfig


class LoginRequired(Exception):
    """Raised by `require_principal`; the app answers with a redirect to the landing page."""


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def authenticate_request(request: Request) -> Optional[Principal]:
    """
    Return the session principal if the request carries a valid session cookie.

    Validation is entirely the session decoder's: signature, max age, payload shape.
    """
    cfg = get_config(request)
    return decode_session(cfg, request.cookies.get(session_cookie_name(cfg)))


def require_principal(request: Request) -> Principal:
    principal = authenticate_request(request)
    if principal is None:
        raise LoginRequired()
    return principal
