"""Protocol interfaces for all spa_stats components."""

from spa_stats.interfaces.explorer import AbiFetcher, ContractABI
from spa_stats.interfaces.contracts import ContractBinder, ContractHandle
from spa_stats.interfaces.provider import StatsProvider

__all__ = [
    "AbiFetcher", "ContractABI",
    "ContractBinder", "ContractHandle",
    "StatsProvider",
]
