"""Rebase, five-day rate and APY derivation."""

from __future__ import annotations

import math
from decimal import Context, Decimal

from spa_stats.models.stats import StakingStats

REBASES_PER_DAY = 3
FIVE_DAY_REBASES = 5 * REBASES_PER_DAY
YEARLY_REBASES = 365 * REBASES_PER_DAY

# Enough digits to divide two uint256 values before rounding to a float
_DIVISION_CONTEXT = Context(prec=80)


def rebase_rate(distribute: int, circ: int) -> float:
    """Per-rebase reward rate, ``distribute / circ``.

    Both uint256 values are divided in Decimal at 80 digits and rounded once
    to a float, so the only precision lost is the final conversion.
    """
    if circ <= 0:
        raise ValueError(f"circulating supply must be positive, got {circ}")
    return float(_DIVISION_CONTEXT.divide(Decimal(distribute), Decimal(circ)))


def compound(rate: float, periods: int) -> float:
    """Growth of 1 unit over ``periods`` rebases, minus the principal."""
    try:
        return (1 + rate) ** periods - 1
    except OverflowError:
        return math.inf


def compute_staking_stats(distribute: int, circ: int) -> StakingStats:
    rebase = rebase_rate(distribute, circ)
    return StakingStats(
        staking_rebase=rebase,
        five_day_rate=compound(rebase, FIVE_DAY_REBASES),
        staking_apy=compound(rebase, YEARLY_REBASES),
    )
