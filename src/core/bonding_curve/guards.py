"""Guard functions for the bonding-curve engine.

One function per action (plus the sell payout check, which needs the computed
proceeds). Each returns None when the action may proceed from the PRE-state
and raises the matching ``CurveError`` otherwise. Check order is part of the
contract: the first failing check determines the error.
"""

from __future__ import annotations

from typing import Optional

from .errors import (
    ArithmeticOverflow,
    ExceedsTotalSupply,
    InsufficientBalance,
    InsufficientContractBalance,
    InsufficientReserve,
    OnlyOrganization,
    SinkAddress,
    ZeroAmount,
    ZeroProceeds,
    ZeroValue,
)
from .math import MAX_UINT256
from .types import CurveParameters, Identity, is_sink_identity, same_identity


def _require_uint(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"amount must be int, got {type(value).__name__}")
    if value < 0 or value > MAX_UINT256:
        raise ArithmeticOverflow(value)


def _require_value(value: int) -> None:
    _require_uint(value)
    if value == 0:
        raise ZeroValue()


def guard_buy(value: int) -> None:
    _require_value(value)


def guard_rebuy(params: CurveParameters, caller: Optional[Identity], value: int) -> None:
    if not same_identity(caller, params.operator):
        raise OnlyOrganization(caller)
    _require_value(value)


def guard_pay(value: int) -> None:
    _require_value(value)


def guard_sell(amount: int, balance: int, total_supply: int, reserve: int) -> None:
    _require_uint(amount)
    if amount == 0:
        raise ZeroAmount()
    if balance < amount:
        raise InsufficientBalance(balance, amount)
    if amount >= total_supply:
        raise ExceedsTotalSupply(amount, total_supply)
    if reserve == 0:
        raise InsufficientReserve()


def guard_sell_payout(proceeds: int, held_balance: int) -> None:
    if proceeds == 0:
        raise ZeroProceeds()
    if held_balance < proceeds:
        raise InsufficientContractBalance(held_balance, proceeds)


def guard_burn(amount: int, balance: int) -> None:
    _require_uint(amount)
    if amount == 0:
        raise ZeroAmount()
    if balance < amount:
        raise InsufficientBalance(balance, amount)


def guard_holder(identity: Optional[Identity]) -> None:
    """The sink only ever receives units through ``burn``."""
    if is_sink_identity(identity):
        raise SinkAddress(identity)
