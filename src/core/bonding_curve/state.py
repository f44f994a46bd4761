"""State construction and serialization for the bonding-curve engine.

Round-trip property (tested): `state_from_dict(state_to_dict(s)) == s` for all valid states.
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import LedgerState

STATE_VAR_NAMES: tuple[str, ...] = tuple(LedgerState.__dataclass_fields__)


def initial_state() -> LedgerState:
    """Return the starting ledger state (``reserve=0``, ``burned_amount=0``)."""
    return LedgerState()


def state_to_dict(state: LedgerState) -> dict[str, int]:
    return {name: getattr(state, name) for name in STATE_VAR_NAMES}


def state_from_dict(d: Mapping[str, Any]) -> LedgerState:
    """Deserialize a dict to a LedgerState. Raises KeyError on missing fields."""
    kwargs: dict[str, int] = {}
    for name in STATE_VAR_NAMES:
        val = d[name]
        if isinstance(val, bool) or not isinstance(val, int):
            raise TypeError(f"state var {name!r} must be int, got {type(val).__name__}")
        if val < 0:
            raise ValueError(f"state var {name!r} must be non-negative: {val}")
        kwargs[name] = int(val)
    return LedgerState(**kwargs)
