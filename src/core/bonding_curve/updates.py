"""State transition functions for the bonding-curve engine.

Each returns a new `LedgerState` computed from the PRE-state via
`dataclasses.replace()`. Nothing here touches the ledgers; the engine commits
the returned state only after the matching ledger mutation succeeded.
"""

from __future__ import annotations

from dataclasses import replace

from .math import checked_add, checked_sub
from .types import LedgerState


def apply_mint(state: LedgerState, reserve_share: int) -> LedgerState:
    return replace(state, reserve=checked_add(state.reserve, reserve_share))


def apply_sell(state: LedgerState, proceeds: int) -> LedgerState:
    # Underflow raises ArithmeticOverflow; reserve never goes negative.
    return replace(state, reserve=checked_sub(state.reserve, proceeds))


def apply_burn(state: LedgerState, amount: int) -> LedgerState:
    return replace(state, burned_amount=checked_add(state.burned_amount, amount))
