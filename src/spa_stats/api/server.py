"""HTTP API - aiohttp routes over the stats provider."""

from __future__ import annotations

import logging

from aiohttp import web

from spa_stats.api.render import stats_to_json, stats_to_xml
from spa_stats.errors import NotReadyError, StatsError
from spa_stats.interfaces.provider import StatsProvider
from spa_stats.models.stats import LoadState

log = logging.getLogger(__name__)

PROVIDER_KEY = web.AppKey("provider", StatsProvider)


def _error_response(request: web.Request, exc: Exception) -> web.Response:
    """Log a handler failure and map it to a status code and JSON error body."""
    if isinstance(exc, NotReadyError):
        log.warning("%s %s: %s", request.method, request.path, exc)
        return web.json_response(exc.to_dict(), status=exc.status)
    if isinstance(exc, StatsError):
        log.error("%s %s failed: %s", request.method, request.path, exc)
        return web.json_response(exc.to_dict(), status=exc.status)

    log.error("%s %s failed: %s", request.method, request.path, exc, exc_info=exc)
    return web.json_response(
        {"error": "internal_error", "message": "internal server error"}, status=500,
    )


# ── Handlers ───────────────────────────────────────────


async def handle_stats(request: web.Request) -> web.Response:
    """Staking stats as JSON, or XML with ``?format=xml``."""
    provider = request.app[PROVIDER_KEY]
    try:
        stats = await provider.get_staking_stats()
    except Exception as exc:
        return _error_response(request, exc)

    if request.query.get("format") == "xml":
        return web.Response(body=stats_to_xml(stats), content_type="application/xml")
    return web.json_response(stats_to_json(stats))


async def handle_circulating_supply(request: web.Request) -> web.Response:
    """Raw circulating supply as plain text."""
    provider = request.app[PROVIDER_KEY]
    try:
        supply = await provider.get_circulating_supply()
    except Exception as exc:
        return _error_response(request, exc)
    return web.Response(text=str(supply))


async def handle_health(request: web.Request) -> web.Response:
    state = request.app[PROVIDER_KEY].state
    status = 200 if state is LoadState.READY else 503
    return web.json_response({"state": state.value}, status=status)


async def handle_fallback(request: web.Request) -> web.Response:
    return web.json_response({"message": "hi"})


def create_app(provider: StatsProvider) -> web.Application:
    """Build the aiohttp application around ``provider``.

    The circulating-supply route only exists when the provider tracks a
    circulating-supply contract. Every unmatched request, whatever the
    method, gets the ``{"message": "hi"}`` fallback.
    """
    app = web.Application()
    app[PROVIDER_KEY] = provider

    app.router.add_get("/api/stats", handle_stats)
    if provider.tracks_circulating_supply:
        app.router.add_get("/api/v0/circulating-supply", handle_circulating_supply)
    app.router.add_get("/api/health", handle_health)
    app.router.add_route("*", "/{tail:.*}", handle_fallback)
    return app
