"""Explorer and node integration components."""

from spa_stats.chain.explorer import ExplorerAbiFetcher
from spa_stats.chain.binder import BoundContract, Web3ContractBinder, make_web3
from spa_stats.chain.contracts import (
    CirculatingSupplyContract,
    StakedTokenContract,
    StakingContract,
)

__all__ = [
    "ExplorerAbiFetcher",
    "BoundContract", "Web3ContractBinder", "make_web3",
    "CirculatingSupplyContract", "StakedTokenContract", "StakingContract",
]
