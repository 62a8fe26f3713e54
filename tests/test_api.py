"""HTTP API routes against mock providers."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest
from aiohttp import test_utils

from spa_stats.api.server import create_app
from spa_stats.errors import NodeError, ParseError, UpstreamError
from spa_stats.models.config import ContractsConfig
from spa_stats.models.stats import LoadState, StakingStats
from spa_stats.stats.provider import StakingStatsProvider

from tests.conftest import OHM_CIRC, STAKED_TOKEN_ADDRESS, STAKING_ADDRESS
from tests.mocks import MockProvider

STATS_KEYS = {"stakingRebase", "fiveDayRate", "stakingAPY"}


@pytest.fixture
async def make_client():
    """Factory: start a TestClient around create_app(provider)."""
    clients: list[test_utils.TestClient] = []

    async def _make(provider) -> test_utils.TestClient:
        client = test_utils.TestClient(test_utils.TestServer(create_app(provider)))
        await client.start_server()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.close()


# ── /api/stats ────────────────────────────────────────────────────


async def test_stats_json(make_client, loaded_provider):
    client = await make_client(loaded_provider)

    resp = await client.get("/api/stats")

    assert resp.status == 200
    assert resp.content_type == "application/json"
    data = await resp.json()
    assert set(data) == STATS_KEYS
    assert data["stakingRebase"] == 0.02
    assert data["fiveDayRate"] == 1.02 ** 15 - 1
    assert data["stakingAPY"] == 1.02 ** 1095 - 1


async def test_stats_xml(make_client, loaded_provider):
    client = await make_client(loaded_provider)

    resp = await client.get("/api/stats", params={"format": "xml"})

    assert resp.status == 200
    assert resp.content_type == "application/xml"
    root = ET.fromstring(await resp.read())
    assert root.tag == "stats"
    assert [child.tag for child in root] == ["stakingRebase", "fiveDayRate", "stakingAPY"]
    assert float(root.findtext("stakingRebase")) == 0.02
    assert float(root.findtext("stakingAPY")) == 1.02 ** 1095 - 1


async def test_stats_unknown_format_is_json(make_client, loaded_provider):
    client = await make_client(loaded_provider)
    resp = await client.get("/api/stats", params={"format": "csv"})
    assert resp.content_type == "application/json"


async def test_stats_before_load_is_not_ready(make_client, provider):
    client = await make_client(provider)

    resp = await client.get("/api/stats")

    assert resp.status == 503
    body = await resp.json()
    assert body["error"] == "not_ready"
    assert "unloaded" in body["message"]


@pytest.mark.parametrize(
    "error,status,kind",
    [
        (UpstreamError("Invalid API Key"), 502, "upstream_error"),
        (ParseError("invalid ABI"), 502, "parse_error"),
        (NodeError("execution reverted"), 502, "node_error"),
    ],
)
async def test_stats_typed_errors(make_client, error, status, kind):
    client = await make_client(MockProvider(error=error))

    resp = await client.get("/api/stats")

    assert resp.status == status
    assert await resp.json() == {"error": kind, "message": error.message}


async def test_stats_unexpected_error_is_500(make_client):
    client = await make_client(MockProvider(error=RuntimeError("boom")))

    resp = await client.get("/api/stats")

    assert resp.status == 500
    body = await resp.json()
    assert body["error"] == "internal_error"
    assert "boom" not in body["message"]


async def test_stats_infinite_apy_is_null(make_client):
    stats = StakingStats(1.0, 2.0 ** 15 - 1, float("inf"))
    client = await make_client(MockProvider(stats=stats))

    data = await (await client.get("/api/stats")).json()
    assert data["stakingAPY"] is None

    resp = await client.get("/api/stats", params={"format": "xml"})
    root = ET.fromstring(await resp.read())
    assert root.findtext("stakingAPY") == "Infinity"


# ── /api/v0/circulating-supply ───────────────────────────────────


async def test_circulating_supply(make_client, loaded_provider):
    client = await make_client(loaded_provider)

    resp = await client.get("/api/v0/circulating-supply")

    assert resp.status == 200
    assert resp.content_type == "text/plain"
    assert await resp.text() == str(OHM_CIRC)


async def test_circulating_supply_error(make_client):
    client = await make_client(MockProvider(error=NodeError("timeout")))
    resp = await client.get("/api/v0/circulating-supply")
    assert resp.status == 502


async def test_circulating_supply_absent_in_two_contract_variant(make_client, mock_binder):
    contracts = ContractsConfig(staking=STAKING_ADDRESS, staked_token=STAKED_TOKEN_ADDRESS)
    provider = StakingStatsProvider(mock_binder, contracts)
    await provider.load()
    client = await make_client(provider)

    resp = await client.get("/api/v0/circulating-supply")

    # Falls through to the catch-all
    assert resp.status == 200
    assert await resp.json() == {"message": "hi"}


# ── /api/health ──────────────────────────────────────────────────


async def test_health_tracks_load_state(make_client, provider):
    client = await make_client(provider)

    resp = await client.get("/api/health")
    assert resp.status == 503
    assert await resp.json() == {"state": "unloaded"}

    await provider.load()
    resp = await client.get("/api/health")
    assert resp.status == 200
    assert await resp.json() == {"state": "ready"}


async def test_health_load_failed(make_client):
    client = await make_client(MockProvider(state=LoadState.LOAD_FAILED))
    resp = await client.get("/api/health")
    assert resp.status == 503
    assert (await resp.json())["state"] == "load_failed"


# ── Catch-all ────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/"),
        ("GET", "/anything/unmatched"),
        ("GET", "/api/v1/stats?x=1"),
        ("POST", "/some/path"),
        ("PUT", "/api"),
        ("DELETE", "/api/stats"),
    ],
)
async def test_fallback(make_client, loaded_provider, method, path):
    client = await make_client(loaded_provider)

    resp = await client.request(method, path)

    assert resp.status == 200
    assert await resp.json() == {"message": "hi"}
