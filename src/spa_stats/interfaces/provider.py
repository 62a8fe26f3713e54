"""StatsProvider protocol - on-chain reads and derived staking statistics."""

from __future__ import annotations

from typing import Protocol

from spa_stats.models.stats import EpochInfo, LoadState, StakingStats


class StatsProvider(Protocol):
    """Owns the tracked contract handles and computes staking statistics."""

    @property
    def state(self) -> LoadState:
        """Current readiness of the contract handles."""
        ...

    @property
    def tracks_circulating_supply(self) -> bool:
        """Whether a circulating-supply contract is configured."""
        ...

    async def load(self) -> None:
        """Bind all tracked contracts. Must finish before reads succeed."""
        ...

    async def get_circulating_supply(self) -> int:
        """Raw circulating supply from the circulating-supply contract."""
        ...

    async def get_epoch(self) -> EpochInfo:
        """Current epoch from the staking contract."""
        ...

    async def get_circ(self) -> int:
        """Circulating supply of the staked token."""
        ...

    async def get_staking_stats(self) -> StakingStats:
        """Rebase rate, five-day rate and APY derived from the current epoch."""
        ...
