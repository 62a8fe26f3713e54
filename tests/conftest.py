"""Shared fixtures for spa_stats tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from spa_stats.models.config import ContractsConfig, StatsConfig
from spa_stats.stats.provider import StakingStatsProvider

from tests.factories import (
    make_circulating_supply_abi,
    make_staked_token_abi,
    make_staking_abi,
)
from tests.mocks import MockBinder, MockContract

STAKING_ADDRESS = "0x8e2549225e21b1da105563d419d5689b80343e01"
STAKED_TOKEN_ADDRESS = "0x8e2549225e21b1da105563d419d5689b80343e02"
CIRCULATING_SUPPLY_ADDRESS = "0x8e2549225e21b1da105563d419d5689b80343e03"

PROVIDER_HOST = "https://rpc.ftm.tools"
EXPLORER_URL = "https://api.ftmscan.com/api"

# 300000 / 15000000 = 0.02 per rebase
DISTRIBUTE = 300_000
STAKED_CIRC = 15_000_000
OHM_CIRC = 123_456_789

FTMSCAN_URL = "https://ftmscan.com"


def ftmscan_link(address: str) -> str:
    """Build an FTMScan link for a contract address."""
    return f'<a href="{FTMSCAN_URL}/address/{address}" target="_blank">{address}</a>'


# ── Report metadata & explorer links ─────────────────────────────


def pytest_configure(config):
    """Add network info to the HTML report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Network"] = "Fantom Opera"
    meta["Staking Contract"] = STAKING_ADDRESS
    meta["Staked Token"] = STAKED_TOKEN_ADDRESS
    meta["Circulating Supply Contract"] = CIRCULATING_SUPPLY_ADDRESS


def pytest_html_results_summary(prefix, summary, postfix):
    """Inject clickable FTMScan links into the report summary."""
    prefix.append(
        '<div style="margin:8px 0;padding:10px;background:#f8f9fa;border:1px solid #dee2e6;'
        'border-radius:4px;font-family:monospace;font-size:13px;">'
        "<strong>FTMScan Contract Links</strong><br/>"
        f"Staking: {ftmscan_link(STAKING_ADDRESS)}<br/>"
        f"Staked Token: {ftmscan_link(STAKED_TOKEN_ADDRESS)}<br/>"
        f"Circulating Supply: {ftmscan_link(CIRCULATING_SUPPLY_ADDRESS)}"
        "</div>"
    )


def make_test_config(**overrides) -> StatsConfig:
    """Build a StatsConfig suitable for testing."""
    defaults = dict(
        host="127.0.0.1",
        port=3000,
        provider_host=PROVIDER_HOST,
        explorer_url=EXPLORER_URL,
        explorer_api_key="TESTKEY",
        explorer_timeout=1.0,
        contracts=ContractsConfig(
            staking=STAKING_ADDRESS,
            staked_token=STAKED_TOKEN_ADDRESS,
            circulating_supply=CIRCULATING_SUPPLY_ADDRESS,
        ),
    )
    defaults.update(overrides)
    return StatsConfig(**defaults)


def make_contracts(
    distribute: int = DISTRIBUTE,
    staked_circ: int = STAKED_CIRC,
    ohm_circ: int = OHM_CIRC,
) -> dict[str, MockContract]:
    """Mock handles for all three tracked contracts, keyed by address."""
    return {
        STAKING_ADDRESS: MockContract(
            STAKING_ADDRESS,
            abi=make_staking_abi(),
            results={
                "epoch": {
                    "length": 28800,
                    "number": 120,
                    "endBlock": 31_000_000,
                    "distribute": distribute,
                },
            },
        ),
        STAKED_TOKEN_ADDRESS: MockContract(
            STAKED_TOKEN_ADDRESS,
            abi=make_staked_token_abi(),
            results={"circulatingSupply": staked_circ},
        ),
        CIRCULATING_SUPPLY_ADDRESS: MockContract(
            CIRCULATING_SUPPLY_ADDRESS,
            abi=make_circulating_supply_abi(),
            results={"OHMCirculatingSupply": ohm_circ},
        ),
    }


@pytest.fixture
def test_config():
    """Default StatsConfig for tests (three-contract variant)."""
    return make_test_config()


@pytest.fixture
def mock_contracts():
    return make_contracts()


@pytest.fixture
def mock_binder(mock_contracts):
    return MockBinder(mock_contracts)


@pytest.fixture
def provider(test_config, mock_binder):
    """StakingStatsProvider over mock contracts, not loaded yet."""
    return StakingStatsProvider(mock_binder, test_config.contracts)


@pytest.fixture
async def loaded_provider(provider):
    """StakingStatsProvider with all contracts bound."""
    await provider.load()
    return provider
