"""Configuration models for the stats service."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ContractsConfig:
    """On-chain addresses of the tracked contracts."""

    staking: str = ""  # staking contract, exposes epoch()
    staked_token: str = ""  # sSPA, exposes circulatingSupply()
    circulating_supply: str = ""  # optional, exposes OHMCirculatingSupply()

    def missing(self) -> list[str]:
        """Names of required addresses that are not set."""
        return [
            name for name in ("staking", "staked_token")
            if not getattr(self, name)
        ]


@dataclass
class StatsConfig:
    """Complete service configuration."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    # Node
    provider_host: str = ""  # JSON-RPC URL

    # Explorer
    explorer_url: str = "https://api.ftmscan.com/api"
    explorer_api_key: str = ""  # loaded from env var FTM_SCAN_API_KEY
    explorer_timeout: float = 5.0  # seconds

    # Contracts
    contracts: ContractsConfig = field(default_factory=ContractsConfig)
