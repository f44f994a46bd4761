from __future__ import annotations

import pytest

from src.state.native_ledger import NativeLedger
from src.state.token_ledger import TokenLedger

ALICE = "0x" + "a1" * 20
BOB = "0x" + "b2" * 20


class TestTokenLedger:
    def test_mint_and_supply(self) -> None:
        t = TokenLedger()
        t.mint(ALICE, 10)
        t.mint(BOB, 5)
        assert t.balance_of(ALICE) == 10
        assert t.total_supply() == 15
        assert t.verify_supply()

    def test_burn_from_reduces_supply(self) -> None:
        t = TokenLedger()
        t.mint(ALICE, 10)
        t.burn_from(ALICE, 4)
        assert t.balance_of(ALICE) == 6
        assert t.total_supply() == 6

    def test_burn_more_than_balance(self) -> None:
        t = TokenLedger()
        t.mint(ALICE, 3)
        with pytest.raises(ValueError):
            t.burn_from(ALICE, 4)
        assert t.total_supply() == 3

    def test_transfer_keeps_supply(self) -> None:
        t = TokenLedger()
        t.mint(ALICE, 10)
        t.transfer(ALICE, BOB, 10)
        assert t.balance_of(ALICE) == 0
        assert t.balance_of(BOB) == 10
        assert t.total_supply() == 10
        # Zero balances are dropped.
        assert ALICE not in t.get_all_balances()

    def test_negative_amounts_rejected(self) -> None:
        t = TokenLedger()
        with pytest.raises(ValueError):
            t.mint(ALICE, -1)
        with pytest.raises(ValueError):
            t.transfer(ALICE, BOB, -1)

    def test_snapshot_restore(self) -> None:
        t = TokenLedger()
        t.mint(ALICE, 10)
        snap = t.snapshot()
        t.transfer(ALICE, BOB, 4)
        t.mint(BOB, 100)
        t.restore(snap)
        assert t.get_all_balances() == {ALICE: 10}
        assert t.total_supply() == 10


class TestNativeLedger:
    def test_credit_debit(self) -> None:
        n = NativeLedger()
        n.credit(ALICE, 100)
        n.debit(ALICE, 40)
        assert n.balance_of(ALICE) == 60
        with pytest.raises(ValueError):
            n.debit(ALICE, 61)

    def test_transfer_without_hook(self) -> None:
        n = NativeLedger()
        n.credit(ALICE, 100)
        assert n.transfer(ALICE, BOB, 30) is True
        assert (n.balance_of(ALICE), n.balance_of(BOB)) == (70, 30)

    def test_transfer_sender_short(self) -> None:
        n = NativeLedger()
        with pytest.raises(ValueError):
            n.transfer(ALICE, BOB, 1)

    def test_hook_sees_funds(self) -> None:
        n = NativeLedger()
        n.credit(ALICE, 100)
        seen = []
        n.set_receive_hook(BOB, lambda sender, amount: seen.append((sender, amount, n.balance_of(BOB))))
        assert n.transfer(ALICE, BOB, 30)
        assert seen == [(ALICE, 30, 30)]

    def test_rejecting_hook_reverts(self) -> None:
        n = NativeLedger()
        n.credit(ALICE, 100)

        def hook(sender: str, amount: int) -> None:
            # Spend the funds, then reject: everything is undone.
            n.transfer(BOB, ALICE, amount)
            raise RuntimeError("no thanks")

        n.set_receive_hook(BOB, hook)
        assert n.transfer(ALICE, BOB, 30) is False
        assert (n.balance_of(ALICE), n.balance_of(BOB)) == (100, 0)

    def test_remove_hook(self) -> None:
        n = NativeLedger()
        n.credit(ALICE, 10)
        def reject(sender: str, amount: int) -> None:
            raise RuntimeError("closed")

        n.set_receive_hook(BOB, reject)
        assert n.transfer(ALICE, BOB, 1) is False
        n.set_receive_hook(BOB, None)
        assert n.transfer(ALICE, BOB, 1) is True
