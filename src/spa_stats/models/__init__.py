"""Data models for the spa_stats service."""

from spa_stats.models.config import ContractsConfig, StatsConfig
from spa_stats.models.stats import EpochInfo, LoadState, StakingStats

__all__ = [
    "ContractsConfig", "StatsConfig",
    "EpochInfo", "LoadState", "StakingStats",
]
