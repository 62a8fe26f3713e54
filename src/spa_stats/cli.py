"""CLI entry point for the spa_stats service."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import click

from spa_stats.api.render import stats_to_json, stats_to_xml
from spa_stats.chain.binder import make_web3
from spa_stats.chain.explorer import ExplorerAbiFetcher
from spa_stats.config import load_config
from spa_stats.errors import StatsError
from spa_stats.service import build_provider, run_service


def _require_provider(cfg):
    """Exit with error if no node URL is configured."""
    if not cfg.provider_host:
        click.echo("Error: No provider host configured.", err=True)
        click.echo("Set SPA_STATS_PROVIDER_HOST or [provider] host in config.", err=True)
        sys.exit(1)


def _require_contracts(cfg):
    """Exit with error if the staking or staked-token address is missing."""
    missing = cfg.contracts.missing()
    if missing:
        click.echo(f"Error: Missing contract address(es): {', '.join(missing)}", err=True)
        click.echo("Set them under [contracts] in config or via SPA_STATS_*_ADDRESS.", err=True)
        sys.exit(1)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """spa_stats - staking rebase, five-day rate and APY over HTTP."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    cfg = load_config(config_path)
    ctx.obj["config"] = cfg

    level = logging.DEBUG if verbose else getattr(logging, cfg.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Service ────────────────────────────────────────────


@cli.command()
@click.option("--port", type=int, default=None, help="Listen port (overrides config and PORT)")
@click.pass_context
def serve(ctx: click.Context, port: int | None) -> None:
    """Start the HTTP API."""
    cfg = ctx.obj["config"]
    _require_provider(cfg)
    _require_contracts(cfg)
    if port is not None:
        cfg.port = port

    click.echo(f"Starting spa_stats on {cfg.host}:{cfg.port}")
    asyncio.run(run_service(cfg))


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show effective configuration."""
    cfg = ctx.obj["config"]
    click.echo(f"Listen:       {cfg.host}:{cfg.port}")
    click.echo(f"Provider:     {cfg.provider_host or '(not set)'}")
    click.echo(f"Explorer:     {cfg.explorer_url}")
    click.echo(f"API key:      {'***configured***' if cfg.explorer_api_key else '(not set)'}")
    click.echo(f"Staking:      {cfg.contracts.staking or '(not set)'}")
    click.echo(f"Staked token: {cfg.contracts.staked_token or '(not set)'}")
    click.echo(f"Circ. supply: {cfg.contracts.circulating_supply or '(not set)'}")


@cli.command()
@click.option(
    "--format", "fmt", type=click.Choice(["json", "xml"]), default="json",
    help="Output format",
)
@click.pass_context
def stats(ctx: click.Context, fmt: str) -> None:
    """Load the contracts once and print the current staking stats."""
    cfg = ctx.obj["config"]
    _require_provider(cfg)
    _require_contracts(cfg)

    async def _stats():
        w3 = make_web3(cfg.provider_host)
        provider = build_provider(cfg, w3)
        try:
            await provider.load()
            result = await provider.get_staking_stats()
        finally:
            await w3.provider.disconnect()

        if fmt == "xml":
            click.echo(stats_to_xml(result).decode("utf-8"))
        else:
            click.echo(json.dumps(stats_to_json(result), indent=2))

    try:
        asyncio.run(_stats())
    except StatsError as exc:
        click.echo(f"Error ({exc.kind}): {exc.message}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("address")
@click.pass_context
def abi(ctx: click.Context, address: str) -> None:
    """Fetch a contract ABI from the explorer and list its functions."""
    cfg = ctx.obj["config"]
    fetcher = ExplorerAbiFetcher(
        api_key=cfg.explorer_api_key,
        explorer_url=cfg.explorer_url,
        timeout=cfg.explorer_timeout,
    )

    try:
        entries = asyncio.run(fetcher.fetch_abi(address))
    except StatsError as exc:
        click.echo(f"Error ({exc.kind}): {exc.message}", err=True)
        sys.exit(1)

    functions = [e for e in entries if e.get("type") == "function"]
    click.echo(f"{address}: {len(entries)} ABI entries, {len(functions)} functions")
    for fn in functions:
        inputs = ", ".join(i.get("type", "?") for i in fn.get("inputs", []))
        outputs = ", ".join(o.get("type", "?") for o in fn.get("outputs", []))
        mutability = fn.get("stateMutability", "")
        click.echo(f"  {fn.get('name')}({inputs}) -> ({outputs}) [{mutability}]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
