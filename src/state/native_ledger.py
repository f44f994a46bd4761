"""
Native value balances with recipient receive hooks.

A receive hook is arbitrary caller-controlled code run when value arrives at
an identity. It may re-enter the curve engine, and it rejects the transfer by
raising. Rejection follows low-level call semantics: every balance change made
since the transfer started is reverted and ``transfer`` returns False.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from .token_ledger import Amount, Identity

logger = logging.getLogger(__name__)

ReceiveHook = Callable[[Identity, Amount], None]


class NativeLedger:
    """In-memory native value ledger."""

    def __init__(self) -> None:
        self._balances: Dict[Identity, Amount] = {}
        self._hooks: Dict[Identity, ReceiveHook] = {}

    def balance_of(self, identity: Identity) -> Amount:
        return self._balances.get(identity, 0)

    def credit(self, identity: Identity, amount: Amount) -> None:
        """Create native value out of thin air (genesis / faucet)."""
        if amount < 0:
            raise ValueError(f"Credit amount must be non-negative: {amount}")
        new_balance = self.balance_of(identity) + amount
        if new_balance == 0:
            self._balances.pop(identity, None)
        else:
            self._balances[identity] = new_balance

    def debit(self, identity: Identity, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Debit amount must be non-negative: {amount}")
        current = self.balance_of(identity)
        if amount > current:
            raise ValueError(f"Insufficient native balance: {current} < {amount}")
        if current == amount:
            self._balances.pop(identity, None)
        else:
            self._balances[identity] = current - amount

    def set_receive_hook(self, identity: Identity, hook: Optional[ReceiveHook]) -> None:
        """Install (or with ``None`` remove) the receive hook for ``identity``."""
        if hook is None:
            self._hooks.pop(identity, None)
        else:
            self._hooks[identity] = hook

    def transfer(self, sender: Identity, recipient: Identity, amount: Amount) -> bool:
        """
        Move value and run the recipient's hook.

        Returns:
            True if delivered, False if the recipient's hook rejected it

        Raises:
            ValueError: If the sender cannot cover ``amount``
        """
        snap = self.snapshot()
        self.debit(sender, amount)
        self.credit(recipient, amount)
        hook = self._hooks.get(recipient)
        if hook is None:
            return True
        try:
            hook(sender, amount)
        except Exception as exc:
            self.restore(snap)
            logger.warning("native transfer %d %s -> %s rejected: %s", amount, sender, recipient, exc)
            return False
        return True

    def snapshot(self) -> Dict[Identity, Amount]:
        return dict(self._balances)

    def restore(self, snap: Dict[Identity, Amount]) -> None:
        self._balances = dict(snap)

    def __repr__(self) -> str:
        return f"NativeLedger({len(self._balances)} accounts)"
