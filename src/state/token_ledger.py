"""
Fungible token bookkeeping consumed by the curve engine.

Implements the Token Ledger collaborator: balances per identity plus total
supply. The engine only issues ``mint`` / ``burn_from`` / ``transfer`` and reads
``balance_of`` / ``total_supply``.
"""

from __future__ import annotations

import logging
from typing import Dict, Protocol, Tuple

logger = logging.getLogger(__name__)

# Type aliases
Identity = str  # hex string (0x...)
Amount = int  # Non-negative integer (arbitrary precision)

LedgerSnapshot = Tuple[Dict[Identity, Amount], Amount]


class TokenLedgerLike(Protocol):
    def mint(self, to: Identity, amount: Amount) -> None: ...

    def burn_from(self, holder: Identity, amount: Amount) -> None: ...

    def transfer(self, sender: Identity, recipient: Identity, amount: Amount) -> None: ...

    def balance_of(self, identity: Identity) -> Amount: ...

    def total_supply(self) -> Amount: ...

    def snapshot(self) -> LedgerSnapshot: ...

    def restore(self, snap: LedgerSnapshot) -> None: ...


class TokenLedger:
    """
    In-memory token ledger.

    Notes:
    - balances are always non-negative; zero balances are dropped,
    - ``total_supply`` equals the sum of all balances at all times.
    """

    def __init__(self, symbol: str = "CRV") -> None:
        self.symbol = symbol
        self._balances: Dict[Identity, Amount] = {}
        self._total_supply: Amount = 0

    def balance_of(self, identity: Identity) -> Amount:
        """Balance of ``identity``. Returns 0 if not found."""
        return self._balances.get(identity, 0)

    def total_supply(self) -> Amount:
        return self._total_supply

    def _set(self, identity: Identity, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(identity, None)
        else:
            self._balances[identity] = amount

    def _debit(self, identity: Identity, amount: Amount) -> None:
        current = self.balance_of(identity)
        if amount > current:
            raise ValueError(f"Insufficient balance: {current} < {amount}")
        self._set(identity, current - amount)

    def mint(self, to: Identity, amount: Amount) -> None:
        """
        Create ``amount`` units on ``to``.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        self._set(to, self.balance_of(to) + amount)
        self._total_supply += amount
        logger.debug("%s mint %d -> %s", self.symbol, amount, to)

    def burn_from(self, holder: Identity, amount: Amount) -> None:
        """
        Destroy ``amount`` units held by ``holder``.

        Raises:
            ValueError: If amount is negative or exceeds the holder's balance
        """
        if amount < 0:
            raise ValueError(f"Burn amount must be non-negative: {amount}")
        self._debit(holder, amount)
        self._total_supply -= amount
        logger.debug("%s burn %d <- %s", self.symbol, amount, holder)

    def transfer(self, sender: Identity, recipient: Identity, amount: Amount) -> None:
        """Move ``amount`` units between identities; total supply is unchanged."""
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        self._debit(sender, amount)
        self._set(recipient, self.balance_of(recipient) + amount)

    def get_all_balances(self) -> Dict[Identity, Amount]:
        return dict(self._balances)

    def snapshot(self) -> LedgerSnapshot:
        return dict(self._balances), self._total_supply

    def restore(self, snap: LedgerSnapshot) -> None:
        balances, total = snap
        self._balances = dict(balances)
        self._total_supply = total

    def verify_supply(self) -> bool:
        """True when total supply equals the sum of balances."""
        return sum(self._balances.values()) == self._total_supply

    def __repr__(self) -> str:
        return f"TokenLedger({self.symbol}, {len(self._balances)} holders, supply={self._total_supply})"
