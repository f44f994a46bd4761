"""Notification builders, one per action.

Notifications carry ``(actor, token_amount, value_amount)`` for indexers.
``pay`` additionally names the identity that received the minted units.
"""

from __future__ import annotations

from typing import Optional

from .types import Event, Identity, Notification


def effect_buy(caller: Identity, minted: int, value: int) -> Notification:
    return Notification(Event.BOUGHT, caller, minted, value)


def effect_rebuy(caller: Identity, minted: int, value: int) -> Notification:
    return Notification(Event.REBOUGHT, caller, minted, value)


def effect_pay(caller: Identity, minted: int, value: int, beneficiary: Optional[Identity]) -> Notification:
    return Notification(Event.PAID, caller, minted, value, beneficiary=beneficiary)


def effect_sell(caller: Identity, amount: int, proceeds: int) -> Notification:
    return Notification(Event.SOLD, caller, amount, proceeds)


def effect_burn(caller: Identity, amount: int) -> Notification:
    return Notification(Event.BURNED, caller, amount, 0)
