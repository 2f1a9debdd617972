"""
HTTP server for the inventory viewer.

Routes:
- `/`                   landing page
- `/auth/steam`         start Steam OpenID sign-in
- `/auth/steam/return`  OpenID callback
- `/profile/{steamid}`  the signed-in user's profile + inventory (auth required)
- `/logout`             drop the session
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

import requests
from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import PlainTextResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from steamview.auth.deps import LoginRequired, authenticate_request, get_config, require_principal
from steamview.auth.models import Principal
from steamview.auth.session import clear_session_cookie_kwargs, encode_session, session_cookie_kwargs
from steamview.auth.steam_openid import SteamAuthError, build_login_url, fetch_player_summary, verify_assertion
from steamview.config import AppConfig, load_config
from steamview.inventory.client import fetch_inventory
from steamview.views import build_profile_view

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parents[1]
TEMPLATES = Jinja2Templates(directory=str(PACKAGE_DIR / "templates"))

CONTENT_SECURITY_POLICY = "; ".join(
    [
        "default-src 'self'",
        "img-src 'self' data: https://steamcdn-a.akamaihd.net https://*.steamcommunity.com "
        "https://*.steamstatic.com https://*.akamaihd.net",
        "style-src 'self' 'unsafe-inline'",
        "script-src 'self'",
    ]
)


def _security_headers(resp: Response) -> Response:
    resp.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
    resp.headers["X-Content-Type-Options"] = "nosniff"
    return resp


def _redirect(url: str) -> RedirectResponse:
    resp = RedirectResponse(url=url, status_code=302)
    resp.headers["Cache-Control"] = "no-store"
    return resp


def _profile_path(steamid: str) -> str:
    return f"/profile/{steamid}"


def create_app(cfg: Optional[AppConfig] = None) -> FastAPI:
    cfg = cfg or load_config()
    app = FastAPI(title="Steam inventory viewer", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = cfg
    app.mount("/static", StaticFiles(directory=str(PACKAGE_DIR / "static")), name="static")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all incoming HTTP requests and attach security headers."""
        start_time = time.time()
        logger.debug("%s %s", request.method, request.url.path)
        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error("%s %s - ERROR after %.3fs: %s", request.method, request.url.path, process_time, str(e))
            raise
        _security_headers(response)
        process_time = time.time() - start_time
        logger.debug("%s %s - %d (%.3fs)", request.method, request.url.path, response.status_code, process_time)
        return response

    @app.exception_handler(LoginRequired)
    async def _login_required(_request: Request, _exc: LoginRequired) -> RedirectResponse:
        return _redirect("/")

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> PlainTextResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        # Served by the outermost error middleware, so log_requests never sees it.
        return _security_headers(PlainTextResponse("Something broke!", status_code=500))

    @app.get("/healthz")
    def healthz() -> Dict[str, Any]:
        return {"ok": True}

    @app.get("/")
    def landing_page(request: Request):
        principal = authenticate_request(request)
        return TEMPLATES.TemplateResponse(request, "index.html", {"principal": principal})

    @app.get("/auth/steam")
    def auth_steam(cfg: AppConfig = Depends(get_config)) -> RedirectResponse:
        """Initiate Steam OpenID sign-in."""
        try:
            url = build_login_url(cfg)
        except ValueError as e:
            logger.warning("Cannot start Steam sign-in: %s", str(e))
            return _redirect("/")
        return _redirect(url)

    @app.get("/auth/steam/return")
    def auth_steam_return(request: Request, cfg: AppConfig = Depends(get_config)) -> RedirectResponse:
        """Handle the OpenID callback; every failure lands back on `/` without detail."""
        params = dict(request.query_params)
        try:
            steamid = verify_assertion(cfg, params)
            summary = fetch_player_summary(cfg, steamid)
        except (SteamAuthError, requests.RequestException, ValueError) as e:
            logger.warning("Steam sign-in failed: %s", str(e))
            return _redirect("/")

        if not cfg.is_production:
            logger.debug("Steam profile: %s", summary)

        principal = Principal.from_player_summary(steamid, summary)
        session_value = encode_session(cfg, principal)
        if not session_value:
            logger.error("Session signing is not configured (SESSION_SECRET); refusing sign-in")
            return _redirect("/")

        logger.info("Signed in steamid=%s", principal.steamid)
        resp = _redirect(_profile_path(principal.steamid))
        resp.set_cookie(**session_cookie_kwargs(cfg, session_value))
        return resp

    @app.get("/profile/{steamid}")
    def profile_page(
        request: Request,
        steamid: str,
        principal: Principal = Depends(require_principal),
        cfg: AppConfig = Depends(get_config),
    ):
        # Only ever show the signed-in user's own inventory.
        if principal.steamid != steamid:
            return _redirect(_profile_path(principal.steamid))

        items = fetch_inventory(cfg, steamid)
        view = build_profile_view(principal, items, show_debug=cfg.is_development)
        return TEMPLATES.TemplateResponse(request, "profile.html", {"view": view})

    @app.get("/logout")
    def logout(cfg: AppConfig = Depends(get_config)) -> RedirectResponse:
        resp = _redirect("/")
        try:
            resp.set_cookie(**clear_session_cookie_kwargs(cfg))
        except Exception:
            logger.exception("Logout error")
        return resp

    return app


def run(host: Optional[str] = None, port: Optional[int] = None) -> None:
    import uvicorn

    cfg = load_config()
    log_level = cfg.log_level.upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # basicConfig is a no-op if main.py already configured the root logger.
    logging.getLogger("steamview").setLevel(getattr(logging, log_level, logging.INFO))

    # Map Python logging levels to uvicorn log levels
    uvicorn_log_level = (
        cfg.log_level if cfg.log_level in ["critical", "error", "warning", "info", "debug", "trace"] else "info"
    )
    if not cfg.session_secret:
        logger.warning("SESSION_SECRET is not set; sign-in will fail until it is configured")
    if not cfg.steam_api_key:
        logger.warning("STEAM_API_KEY is not set; profile lookups will fail")

    bind_host = host or cfg.host
    bind_port = port or cfg.port
    logger.info(
        "Starting server on %s:%d (env=%s, app_url=%s, log_level=%s)",
        bind_host,
        bind_port,
        cfg.environment,
        cfg.app_url,
        log_level,
    )
    uvicorn.run(create_app(cfg), host=bind_host, port=bind_port, log_level=uvicorn_log_level)
