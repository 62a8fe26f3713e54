"""Service bootstrap - wires all components together and runs the HTTP API."""

from __future__ import annotations

import asyncio
import logging
import signal

from aiohttp import web
from web3 import AsyncWeb3

from spa_stats.api.server import create_app
from spa_stats.chain.binder import Web3ContractBinder, make_web3
from spa_stats.chain.explorer import ExplorerAbiFetcher
from spa_stats.interfaces.provider import StatsProvider
from spa_stats.models.config import StatsConfig
from spa_stats.stats.provider import StakingStatsProvider

log = logging.getLogger(__name__)


def build_provider(cfg: StatsConfig, w3: AsyncWeb3) -> StakingStatsProvider:
    """Explorer fetcher -> binder on the node connection -> provider."""
    fetcher = ExplorerAbiFetcher(
        api_key=cfg.explorer_api_key,
        explorer_url=cfg.explorer_url,
        timeout=cfg.explorer_timeout,
    )
    binder = Web3ContractBinder(w3, fetcher)
    return StakingStatsProvider(binder, cfg.contracts)


class StatsService:
    """Staking stats HTTP service.

    The listener comes up first; contract loading then runs in the
    background, so requests that arrive early see a provider that is not
    ready yet and get a 503.
    """

    def __init__(self, cfg: StatsConfig, provider: StatsProvider | None = None) -> None:
        self._cfg = cfg
        self._w3: AsyncWeb3 | None = None
        if provider is None:
            self._w3 = make_web3(cfg.provider_host)
            provider = build_provider(cfg, self._w3)
        self.provider = provider
        self.app = create_app(self.provider)
        self.runner: web.AppRunner | None = None
        self._load_task: asyncio.Task | None = None
        self._stopped = asyncio.Event()

    # ── Lifecycle ─────────────────────────────────────────

    async def start(self) -> None:
        """Start listening, then load contracts in the background."""
        log.info("Starting spa_stats service")
        log.info("  Provider: %s", self._cfg.provider_host)
        log.info("  Explorer: %s", self._cfg.explorer_url)
        log.info("  Staking: %s", self._cfg.contracts.staking)
        log.info("  Staked token: %s", self._cfg.contracts.staked_token)
        if self._cfg.contracts.circulating_supply:
            log.info("  Circulating supply: %s", self._cfg.contracts.circulating_supply)

        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        site = web.TCPSite(self.runner, self._cfg.host, self._cfg.port)
        await site.start()
        log.info("Server ready on %s:%d", self._cfg.host, self._cfg.port)

        self._load_task = asyncio.create_task(self._load_contracts())

    async def _load_contracts(self) -> None:
        try:
            await self.provider.load()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            # No retry: the provider stays LOAD_FAILED until restart
            log.error("Failed to load contract ABIs: %s", exc, exc_info=True)
            return
        log.info("Loaded contract ABIs")

    async def serve_forever(self) -> None:
        """Run until stop() is called, then shut down cleanly."""
        await self.start()
        try:
            await self._stopped.wait()
        finally:
            await self.shutdown()

    async def stop(self) -> None:
        """Signal the service to stop gracefully."""
        log.info("Stop requested")
        self._stopped.set()

    async def shutdown(self) -> None:
        if self._load_task:
            self._load_task.cancel()
            try:
                await self._load_task
            except asyncio.CancelledError:
                pass
            self._load_task = None

        if self.runner:
            await self.runner.cleanup()
            self.runner = None

        if self._w3:
            await self._w3.provider.disconnect()
            self._w3 = None
        log.info("Service shut down cleanly")


async def run_service(cfg: StatsConfig) -> None:
    """Entry point for running the service."""
    service = StatsService(cfg)

    loop = asyncio.get_running_loop()

    def _signal_handler():
        asyncio.ensure_future(service.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    await service.serve_forever()
