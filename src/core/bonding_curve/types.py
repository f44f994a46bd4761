"""Data types for the bonding-curve engine.

Parameters and ledger state are frozen dataclasses. The engine replaces its
``LedgerState`` wholesale on commit, which keeps rollback a pointer swap.

Units/conventions:
- native value and token amounts are integer base units,
- `*_ratio` values are basis points (1/10_000),
- identities are hex strings; ``ZERO_ADDRESS``, ``""`` and ``None`` all mean
  "no identity".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional

from .errors import InvalidRatio, SinkAddress, ZeroAddress, ZeroBuySlope
from .math import BPS_SCALE

Identity = str

ZERO_ADDRESS: Identity = "0x" + "00" * 20
SINK_ADDRESS: Identity = "0x000000000000000000000000000000000000dEaD"


def is_zero_identity(identity: Optional[Identity]) -> bool:
    return not identity or identity.lower() == ZERO_ADDRESS


def same_identity(a: Optional[Identity], b: Optional[Identity]) -> bool:
    """Hex identities compare case-insensitively."""
    if a is None or b is None:
        return a is b
    return a.lower() == b.lower()


def is_sink_identity(identity: Optional[Identity]) -> bool:
    return same_identity(identity, SINK_ADDRESS)


@unique
class Action(Enum):
    """One member per state-mutating entry point."""
    BUY = "buy"
    SELL = "sell"
    REBUY = "rebuy"
    PAY = "pay"
    BURN = "burn"


@unique
class Event(Enum):
    """Notification kinds emitted after a successful operation."""
    BOUGHT = "Bought"
    SOLD = "Sold"
    REBOUGHT = "Rebought"
    PAID = "Paid"
    BURNED = "Burned"


@dataclass(frozen=True)
class CurveParameters:
    """Immutable curve configuration, validated once at construction."""

    buy_slope: int
    investment_ratio: int
    distribution_ratio: int
    operator: Identity

    def __post_init__(self) -> None:
        if self.buy_slope <= 0:
            raise ZeroBuySlope()
        if not (1 <= self.investment_ratio <= BPS_SCALE):
            raise InvalidRatio(self.investment_ratio, BPS_SCALE)
        if not (1 <= self.distribution_ratio <= BPS_SCALE):
            raise InvalidRatio(self.distribution_ratio, BPS_SCALE)
        if is_zero_identity(self.operator):
            raise ZeroAddress()
        if is_sink_identity(self.operator):
            raise SinkAddress(self.operator)


@dataclass(frozen=True)
class LedgerState:
    """Numeric state owned by the engine."""

    reserve: int = 0
    burned_amount: int = 0


@dataclass(frozen=True)
class ActionParams:
    """Parameters for ``step()``. Unused fields default to 0/None."""

    action: Action
    value: int = 0                      # buy / rebuy / pay
    amount: int = 0                     # sell / burn
    recipient: Optional[Identity] = None  # pay


@dataclass(frozen=True)
class Notification:
    """Indexer-facing record of one successful operation."""

    event: Event
    actor: Identity
    token_amount: int
    value_amount: int
    beneficiary: Optional[Identity] = None


@dataclass(frozen=True)
class BuyQuote:
    tokens: int
    reserve_share: int
    operator_share: int


@dataclass(frozen=True)
class SellQuote:
    proceeds: int
    main_part: int
    burn_bonus: int


@dataclass(frozen=True)
class StepResult:
    """Result of a single ``step()`` call."""

    accepted: bool
    state: Optional[LedgerState] = None
    notification: Optional[Notification] = None
    rejection: Optional[str] = None
