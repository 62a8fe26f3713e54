"""Typed wrappers exposing only the contract reads the service uses."""

from __future__ import annotations

from typing import Any

from spa_stats.errors import NodeError
from spa_stats.interfaces.contracts import ContractHandle
from spa_stats.models.stats import EpochInfo


def _as_int(value: Any, method: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise NodeError(f"{method}() returned a non-numeric value: {value!r}") from exc


class StakingContract:
    """Staking contract: epoch()."""

    def __init__(self, handle: ContractHandle) -> None:
        self.handle = handle

    async def epoch(self) -> EpochInfo:
        raw = await self.handle.call("epoch")
        try:
            return EpochInfo.from_call(raw)
        except (TypeError, ValueError) as exc:
            raise NodeError(f"unexpected epoch() result: {exc}") from exc


class StakedTokenContract:
    """Staked token (sSPA): circulatingSupply()."""

    def __init__(self, handle: ContractHandle) -> None:
        self.handle = handle

    async def circulating_supply(self) -> int:
        return _as_int(await self.handle.call("circulatingSupply"), "circulatingSupply")


class CirculatingSupplyContract:
    """Circulating-supply helper contract: OHMCirculatingSupply()."""

    def __init__(self, handle: ContractHandle) -> None:
        self.handle = handle

    async def ohm_circulating_supply(self) -> int:
        return _as_int(
            await self.handle.call("OHMCirculatingSupply"), "OHMCirculatingSupply",
        )
