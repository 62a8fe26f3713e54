"""Staking statistics: formula and on-chain provider."""

from spa_stats.stats.formula import compute_staking_stats, rebase_rate
from spa_stats.stats.provider import StakingStatsProvider

__all__ = ["compute_staking_stats", "rebase_rate", "StakingStatsProvider"]
