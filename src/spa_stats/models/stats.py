"""On-chain values and derived staking statistics."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class LoadState(str, Enum):
    """Readiness of the stats provider's contract handles."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    LOAD_FAILED = "load_failed"


def _opt_int(value: Any) -> int | None:
    return None if value is None else int(value)


@dataclass
class EpochInfo:
    """Current epoch as returned by the staking contract's epoch() getter."""

    distribute: int  # reward distributed at the next rebase
    length: int | None = None
    number: int | None = None
    end: int | None = None  # endBlock or endTime, depending on the contract

    @classmethod
    def from_call(cls, raw: Any) -> EpochInfo:
        """Build from a decoded epoch() result.

        Accepts the named mapping produced by BoundContract.call() or a plain
        (length, number, end, distribute) tuple from contracts with unnamed
        outputs.
        """
        if isinstance(raw, Mapping):
            if "distribute" not in raw:
                raise ValueError(f"epoch() result has no 'distribute' field: {sorted(raw)}")
            return cls(
                distribute=int(raw["distribute"]),
                length=_opt_int(raw.get("length")),
                number=_opt_int(raw.get("number")),
                end=_opt_int(raw.get("endBlock", raw.get("endTime", raw.get("end")))),
            )
        values = list(raw)
        if len(values) != 4:
            raise ValueError(f"epoch() returned {len(values)} values, expected 4")
        length, number, end, distribute = values
        return cls(
            distribute=int(distribute),
            length=int(length),
            number=int(number),
            end=int(end),
        )


@dataclass
class StakingStats:
    """Derived staking statistics. Computed per request, never stored."""

    staking_rebase: float
    five_day_rate: float
    staking_apy: float

    def to_dict(self) -> dict[str, float]:
        """Wire representation with the public camelCase keys."""
        return {
            "stakingRebase": self.staking_rebase,
            "fiveDayRate": self.five_day_rate,
            "stakingAPY": self.staking_apy,
        }
