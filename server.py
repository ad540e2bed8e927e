"""
server.py — HTTP surface for the listing pipeline (aiohttp).

Endpoints:
  POST /analyze-item   → JSON listing, or {"error", "details"?} on failure
  GET  /health         → plain-text health check (for uptime monitors)

Status codes:
  200  listing produced
  400  InputError (bad / empty payload)
  500  NoProviderConfiguredError, or an unexpected exception
  502  AllProvidersFailedError
"""
from __future__ import annotations

import json
import logging

from aiohttp import web

import config
from errors import InputError, ListingError
from listing import parse_request
from pipeline import analyze_listing

logger = logging.getLogger(__name__)


# ── Request handlers ───────────────────────────────────────────────────────────

async def handle_analyze(request: web.Request) -> web.Response:
    try:
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise InputError("Invalid request", "Body is not valid JSON")

        analysis_request = parse_request(payload)
        listing = await analyze_listing(analysis_request)
    except ListingError as exc:
        logger.warning("analyze-item failed (%d): %s", exc.http_status, exc)
        return web.json_response(exc.to_dict(), status=exc.http_status)
    except Exception as exc:
        logger.exception("analyze-item crashed")
        return web.json_response(
            {"error": "Internal server error", "details": str(exc)},
            status=500,
        )

    return web.json_response(listing.to_dict())


async def handle_health(request: web.Request) -> web.Response:
    """Health check — returns 200 OK with the provider order."""
    order = ", ".join(config.provider_order()) or "none"
    return web.Response(text=f"OK — providers: {order}", content_type="text/plain")


# ── App factory ────────────────────────────────────────────────────────────────

def build_web_app() -> web.Application:
    # Photos arrive base64-encoded in the JSON body
    app = web.Application(client_max_size=25 * 1024 * 1024)
    app.router.add_post("/analyze-item", handle_analyze)
    app.router.add_get("/health",        handle_health)
    return app


async def start_server() -> web.AppRunner:
    """Start the web server. Returns runner so caller can shut it down cleanly."""
    app    = build_web_app()
    runner = web.AppRunner(app, access_log=logger)
    await runner.setup()
    site = web.TCPSite(runner, config.SERVER_HOST, config.SERVER_PORT)
    await site.start()
    logger.info(
        "Listing server on %s:%d  (providers: %s)",
        config.SERVER_HOST,
        config.SERVER_PORT,
        ", ".join(config.provider_order()) or "none",
    )
    return runner
