"""spa_stats - staking statistics for a rebasing token, served over HTTP."""

__version__ = "0.1.0"
