"""Stats provider - owns the tracked contracts and derives staking statistics."""

from __future__ import annotations

import asyncio
import logging
from typing import TypeVar

from spa_stats.chain.contracts import (
    CirculatingSupplyContract,
    StakedTokenContract,
    StakingContract,
)
from spa_stats.errors import NodeError, NotReadyError
from spa_stats.interfaces.contracts import ContractBinder
from spa_stats.models.config import ContractsConfig
from spa_stats.models.stats import EpochInfo, LoadState, StakingStats
from spa_stats.stats.formula import compute_staking_stats

log = logging.getLogger(__name__)

T = TypeVar("T")


class StakingStatsProvider:
    """Reads epoch and supply values on-chain and computes staking statistics.

    Contract handles are bound once by load(); reads before the provider is
    READY raise NotReadyError instead of touching the node. The handles are
    never written after load() so concurrent requests share them freely.
    """

    def __init__(self, binder: ContractBinder, contracts: ContractsConfig) -> None:
        self._binder = binder
        self._addresses = contracts
        self._state = LoadState.UNLOADED

        self.staking: StakingContract | None = None
        self.staked_token: StakedTokenContract | None = None
        self.circulating_supply: CirculatingSupplyContract | None = None

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def tracks_circulating_supply(self) -> bool:
        return bool(self._addresses.circulating_supply)

    # ── Lifecycle ─────────────────────────────────────────

    async def load(self) -> None:
        """Bind every tracked contract in sequence.

        A failure aborts the load, leaves the provider in LOAD_FAILED and is
        re-raised. Calling load() again rebinds all contracts.
        """
        self._state = LoadState.LOADING
        try:
            if self.tracks_circulating_supply:
                self.circulating_supply = CirculatingSupplyContract(
                    await self._binder.get_contract(self._addresses.circulating_supply)
                )
            self.staking = StakingContract(
                await self._binder.get_contract(self._addresses.staking)
            )
            self.staked_token = StakedTokenContract(
                await self._binder.get_contract(self._addresses.staked_token)
            )
        except Exception:
            self._state = LoadState.LOAD_FAILED
            raise
        self._state = LoadState.READY

    def _require(self, contract: T | None) -> T:
        if self._state is not LoadState.READY or contract is None:
            raise NotReadyError(self._state.value)
        return contract

    # ── Reads ─────────────────────────────────────────────

    async def get_circulating_supply(self) -> int:
        return await self._require(self.circulating_supply).ohm_circulating_supply()

    async def get_epoch(self) -> EpochInfo:
        return await self._require(self.staking).epoch()

    async def get_circ(self) -> int:
        return await self._require(self.staked_token).circulating_supply()

    async def get_staking_stats(self) -> StakingStats:
        """Read epoch and staked supply concurrently, then derive the stats."""
        if self._state is not LoadState.READY:
            raise NotReadyError(self._state.value)
        epoch, circ = await asyncio.gather(self.get_epoch(), self.get_circ())
        try:
            stats = compute_staking_stats(epoch.distribute, circ)
        except ValueError as exc:
            raise NodeError(f"cannot derive stats: {exc}") from exc
        log.debug(
            "Epoch %s: distribute=%d circ=%d rebase=%.10f",
            epoch.number, epoch.distribute, circ, stats.staking_rebase,
        )
        return stats
