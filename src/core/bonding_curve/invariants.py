"""Invariant checkers for the bonding-curve engine.

Each function returns True when the invariant holds, and `check_all()`
returns the list of violated invariant IDs (empty = all pass). The engine runs
`check_all()` before committing every operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .types import LedgerState


@dataclass(frozen=True)
class LedgerView:
    """Post-operation snapshot of everything the invariants read."""

    state: LedgerState
    previous: LedgerState
    total_supply: int
    circulating_supply: int
    sink_balance: int
    held_balance: int


def inv_reserve_nonneg(v: LedgerView) -> bool:
    return v.state.reserve >= 0


def inv_burned_nonneg(v: LedgerView) -> bool:
    return v.state.burned_amount >= 0


def inv_burned_monotone(v: LedgerView) -> bool:
    return v.state.burned_amount >= v.previous.burned_amount


def inv_reserve_backed(v: LedgerView) -> bool:
    return v.state.reserve <= v.held_balance


def inv_sink_covers_burned(v: LedgerView) -> bool:
    # Direct token transfers to the sink can only add to it.
    return v.sink_balance >= v.state.burned_amount


def inv_circulating_consistent(v: LedgerView) -> bool:
    return v.circulating_supply + v.state.burned_amount == v.total_supply


INVARIANT_REGISTRY: dict[str, Callable[[LedgerView], bool]] = {
    "inv_reserve_nonneg": inv_reserve_nonneg,
    "inv_burned_nonneg": inv_burned_nonneg,
    "inv_burned_monotone": inv_burned_monotone,
    "inv_reserve_backed": inv_reserve_backed,
    "inv_sink_covers_burned": inv_sink_covers_burned,
    "inv_circulating_consistent": inv_circulating_consistent,
}


def check_all(view: LedgerView) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(view)
    ]
