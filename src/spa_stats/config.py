"""Configuration loading: TOML file + .env + environment variables + legacy config.json."""

from __future__ import annotations

import json
import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from dotenv import load_dotenv

from spa_stats.models.config import StatsConfig

# Keys used by the original service's config.json
LEGACY_CONTRACT_KEYS = {
    "spaStaking": "staking",
    "sSpa": "staked_token",
    "spaCirculatingSupply": "circulating_supply",
}

DEFAULT_CONFIG_JSON = "config.json"
DEFAULT_ENV_FILE = ".env"


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "SPA_STATS_",
    env_file: str | Path | None = DEFAULT_ENV_FILE,
) -> StatsConfig:
    """Load service configuration from TOML file, env vars, and config.json.

    Priority (highest wins):
        1. Environment variables (SPA_STATS_*, FTM_SCAN_API_KEY, PORT)
        2. Variables from ``env_file`` (never override the real environment)
        3. TOML config file
        4. config.json, for whatever the TOML file leaves unset. Defaults to
           ./config.json; a relative [contracts] config_json is resolved
           against the TOML file's directory.
        5. Defaults from StatsConfig
    """
    raw: dict = {}
    config_dir = Path.cwd()
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)
            config_dir = p.resolve().parent

    cfg = StatsConfig()

    # ── Server section ─────────────────────────────────────
    server = raw.get("server", {})
    if v := server.get("host"):
        cfg.host = str(v)
    if v := server.get("port"):
        cfg.port = int(v)
    if v := server.get("log_level"):
        cfg.log_level = str(v)

    # ── Provider section ───────────────────────────────────
    provider = raw.get("provider", {})
    if v := provider.get("host"):
        cfg.provider_host = str(v)

    # ── Explorer section ───────────────────────────────────
    explorer = raw.get("explorer", {})
    if v := explorer.get("url"):
        cfg.explorer_url = str(v)
    if v := explorer.get("api_key"):
        cfg.explorer_api_key = str(v)
    if v := explorer.get("timeout"):
        cfg.explorer_timeout = float(v)

    # ── Contracts section ──────────────────────────────────
    contracts = raw.get("contracts", {})
    if v := contracts.get("staking"):
        cfg.contracts.staking = str(v)
    if v := contracts.get("staked_token"):
        cfg.contracts.staked_token = str(v)
    if v := contracts.get("circulating_supply"):
        cfg.contracts.circulating_supply = str(v)

    # Fill provider host and addresses from config.json if not explicitly set
    if json_path := contracts.get("config_json"):
        json_file = config_dir / Path(json_path).expanduser()
    else:
        json_file = Path.cwd() / DEFAULT_CONFIG_JSON
    if not cfg.provider_host or cfg.contracts.missing():
        _load_config_json(cfg, json_file)

    # ── .env file ──────────────────────────────────────────
    if env_file is not None:
        load_dotenv(Path(env_file).expanduser(), override=False)

    # ── Environment variable overrides (highest priority) ──
    if key := os.environ.get("FTM_SCAN_API_KEY"):
        cfg.explorer_api_key = key
    if key := os.environ.get(f"{env_prefix}EXPLORER_API_KEY"):
        cfg.explorer_api_key = key
    if url := os.environ.get(f"{env_prefix}EXPLORER_URL"):
        cfg.explorer_url = url
    if host := os.environ.get(f"{env_prefix}PROVIDER_HOST"):
        cfg.provider_host = host
    if addr := os.environ.get(f"{env_prefix}STAKING_ADDRESS"):
        cfg.contracts.staking = addr
    if addr := os.environ.get(f"{env_prefix}STAKED_TOKEN_ADDRESS"):
        cfg.contracts.staked_token = addr
    if addr := os.environ.get(f"{env_prefix}CIRCULATING_SUPPLY_ADDRESS"):
        cfg.contracts.circulating_supply = addr
    if host := os.environ.get(f"{env_prefix}HOST"):
        cfg.host = host
    if port := os.environ.get("PORT"):
        cfg.port = int(port)
    if level := os.environ.get(f"{env_prefix}LOG_LEVEL"):
        cfg.log_level = level

    return cfg


def _load_config_json(cfg: StatsConfig, json_file: Path) -> None:
    """Fill unset provider host and contract addresses from the original config.json."""
    if not json_file.exists():
        return

    with open(json_file) as f:
        data = json.load(f)

    if not cfg.provider_host:
        if host := data.get("provider", {}).get("host"):
            cfg.provider_host = host

    for legacy_key, attr in LEGACY_CONTRACT_KEYS.items():
        if getattr(cfg.contracts, attr):
            continue
        entry = data.get("contracts", {}).get(legacy_key, {})
        if addr := entry.get("address"):
            setattr(cfg.contracts, attr, addr)
