"""Tier 2 fixtures: real explorer API + real Fantom JSON-RPC node."""

from __future__ import annotations

import pytest

from spa_stats.chain.binder import Web3ContractBinder, make_web3
from spa_stats.chain.explorer import ExplorerAbiFetcher
from spa_stats.config import load_config


@pytest.fixture(scope="session")
def live_config():
    """Config from env, .env and config.json. Skip tier2 tests if it is incomplete."""
    cfg = load_config()
    missing = cfg.contracts.missing()
    if not cfg.explorer_api_key:
        missing.append("explorer api key")
    if not cfg.provider_host:
        missing.append("provider host")
    if missing:
        pytest.skip(f"live network not configured (missing {', '.join(missing)})")
    return cfg


@pytest.fixture
def live_fetcher(live_config):
    return ExplorerAbiFetcher(
        api_key=live_config.explorer_api_key,
        explorer_url=live_config.explorer_url,
        timeout=live_config.explorer_timeout,
    )


@pytest.fixture
async def live_binder(live_config, live_fetcher):
    """Web3ContractBinder on the configured node; disconnects on teardown."""
    w3 = make_web3(live_config.provider_host)
    yield Web3ContractBinder(w3, live_fetcher)
    await w3.provider.disconnect()
