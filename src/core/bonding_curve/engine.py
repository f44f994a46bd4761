"""Bonding-curve token engine.

``CurveToken`` owns the ``LedgerState`` and drives the five mutating
operations (``buy``, ``rebuy``, ``pay``, ``sell``, ``burn``). Every operation:

1. Acquires the reentrancy guard (re-entrant calls raise ``ReentrantCall``).
2. Opens a transaction: snapshots LedgerState and both ledgers.
3. Runs the guard checks, computes the curve delta, mutates state and the
   token ledger, and only then sends native value out.
4. Checks all invariants on the post-state.
5. Commits and notifies subscribers, or restores the snapshot and re-raises.

``step(caller, params)`` is the dispatch-table entry point that reports
rejections as ``StepResult`` instead of raising.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from ...state.native_ledger import NativeLedger
from ...state.token_ledger import TokenLedger, TokenLedgerLike
from .effects import effect_burn, effect_buy, effect_pay, effect_rebuy, effect_sell
from .errors import (
    CurveError,
    CurveInvariantError,
    ExceedsTotalSupply,
    InsufficientNativeBalance,
    InsufficientReserve,
    TransferFailed,
    ZeroAddress,
    ZeroAmount,
    ZeroValue,
)
from .guards import (
    guard_burn,
    guard_buy,
    guard_holder,
    guard_pay,
    guard_rebuy,
    guard_sell,
    guard_sell_payout,
)
from .invariants import LedgerView, check_all
from .math import mint_amount, redeem_proceeds, split_payment, spot_price
from .reentrancy import ReentrancyGuard
from .state import initial_state
from .types import (
    SINK_ADDRESS,
    Action,
    ActionParams,
    BuyQuote,
    CurveParameters,
    Identity,
    LedgerState,
    Notification,
    SellQuote,
    StepResult,
    is_sink_identity,
    is_zero_identity,
)
from .updates import apply_burn, apply_mint, apply_sell

logger = logging.getLogger(__name__)

DEFAULT_ENGINE_IDENTITY: Identity = "0x" + "c0" * 20

Subscriber = Callable[[Notification], None]


class CurveToken:
    """Continuous bonding-curve token backed by a native-value reserve."""

    def __init__(
        self,
        params: CurveParameters,
        token_ledger: Optional[TokenLedgerLike] = None,
        native_ledger: Optional[NativeLedger] = None,
        identity: Identity = DEFAULT_ENGINE_IDENTITY,
    ) -> None:
        if is_zero_identity(identity) or is_sink_identity(identity):
            raise ZeroAddress()
        self._params = params
        self.token = token_ledger if token_ledger is not None else TokenLedger()
        self.native = native_ledger if native_ledger is not None else NativeLedger()
        self.identity = identity
        self._state: LedgerState = initial_state()
        self._guard = ReentrancyGuard()
        self._events: list[Notification] = []
        self._subscribers: list[Subscriber] = []

    @classmethod
    def create(
        cls,
        buy_slope: int,
        investment_ratio: int,
        distribution_ratio: int,
        operator: Identity,
        **kwargs,
    ) -> "CurveToken":
        """Validate parameters and construct; nothing is built if validation fails."""
        params = CurveParameters(
            buy_slope=buy_slope,
            investment_ratio=investment_ratio,
            distribution_ratio=distribution_ratio,
            operator=operator,
        )
        return cls(params, **kwargs)

    # -- Views ---------------------------------------------------------------

    @property
    def params(self) -> CurveParameters:
        return self._params

    @property
    def state(self) -> LedgerState:
        return self._state

    def reserve(self) -> int:
        return self._state.reserve

    def burned_amount(self) -> int:
        return self._state.burned_amount

    def total_supply(self) -> int:
        return self.token.total_supply()

    def circulating_supply(self) -> int:
        return self.token.total_supply() - self._state.burned_amount

    def sink_balance(self) -> int:
        return self.token.balance_of(SINK_ADDRESS)

    def held_balance(self) -> int:
        """Native value actually held by the engine identity."""
        return self.native.balance_of(self.identity)

    def spot_price(self) -> int:
        return spot_price(self.token.total_supply(), self._params.buy_slope)

    @property
    def events(self) -> tuple[Notification, ...]:
        return tuple(self._events)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register an indexer callback; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # -- Quotes --------------------------------------------------------------

    def _reserve_ratio(self, action: Action) -> Optional[int]:
        if action is Action.BUY:
            return self._params.investment_ratio
        if action is Action.PAY:
            return self._params.distribution_ratio
        if action is Action.REBUY:
            return None
        raise ValueError(f"not a mint action: {action}")

    def quote_buy(self, value: int, action: Action = Action.BUY) -> BuyQuote:
        """Tokens and value split a mint-type action would produce right now."""
        ratio = self._reserve_ratio(action)
        if value == 0:
            raise ZeroValue()
        tokens = mint_amount(value, self.token.total_supply(), self._params.buy_slope)
        if ratio is None:
            return BuyQuote(tokens=tokens, reserve_share=value, operator_share=0)
        share, remainder = split_payment(value, ratio)
        return BuyQuote(tokens=tokens, reserve_share=share, operator_share=remainder)

    def quote_sell(self, amount: int) -> SellQuote:
        """Proceeds for redeeming ``amount`` units, ignoring the caller's balance."""
        supply = self.token.total_supply()
        if amount == 0:
            raise ZeroAmount()
        if amount >= supply:
            raise ExceedsTotalSupply(amount, supply)
        if self._state.reserve == 0:
            raise InsufficientReserve()
        proceeds, main, bonus = redeem_proceeds(
            amount, supply, self._state.reserve, self._state.burned_amount,
        )
        return SellQuote(proceeds=proceeds, main_part=main, burn_bonus=bonus)

    # -- Transaction plumbing ------------------------------------------------

    @contextmanager
    def _transaction(self, action: Action) -> Iterator[None]:
        state = self._state
        token_snap = self.token.snapshot()
        native_snap = self.native.snapshot()
        try:
            yield
            self._check_invariants(state)
        except Exception as exc:
            self._state = state
            self.token.restore(token_snap)
            self.native.restore(native_snap)
            logger.warning("%s rolled back: %s", action.value, exc)
            raise

    def _check_invariants(self, previous: LedgerState) -> None:
        violations = check_all(LedgerView(
            state=self._state,
            previous=previous,
            total_supply=self.total_supply(),
            circulating_supply=self.circulating_supply(),
            sink_balance=self.sink_balance(),
            held_balance=self.held_balance(),
        ))
        if violations:
            raise CurveInvariantError(violations)

    def _run(self, action: Action, body: Callable[[], Notification]) -> Notification:
        with self._guard:
            with self._transaction(action):
                notification = body()
            self._events.append(notification)
        logger.debug(
            "%s actor=%s tokens=%d value=%d reserve=%d burned=%d",
            action.value, notification.actor, notification.token_amount,
            notification.value_amount, self._state.reserve, self._state.burned_amount,
        )
        for subscriber in list(self._subscribers):
            subscriber(notification)
        return notification

    def _collect(self, caller: Identity, value: int) -> None:
        """Move attached value from ``caller`` into the engine."""
        balance = self.native.balance_of(caller)
        if balance < value:
            raise InsufficientNativeBalance(balance, value)
        self.native.debit(caller, value)
        self.native.credit(self.identity, value)

    def _send(self, recipient: Identity, amount: int) -> None:
        if not self.native.transfer(self.identity, recipient, amount):
            raise TransferFailed(recipient, amount)

    def _mint(self, caller: Identity, value: int, target: Identity, ratio: Optional[int]) -> int:
        guard_holder(target)
        self._collect(caller, value)
        minted = mint_amount(value, self.token.total_supply(), self._params.buy_slope)
        if ratio is None:
            share, remainder = value, 0
        else:
            share, remainder = split_payment(value, ratio)
        new_state = apply_mint(self._state, share)
        self.token.mint(target, minted)
        self._state = new_state
        if remainder:
            self._send(self._params.operator, remainder)
        return minted

    # -- Operations ----------------------------------------------------------

    def buy(self, caller: Identity, value: int) -> Notification:
        """Mint to ``caller``; ``investment_ratio`` of value to reserve, rest to operator."""
        def body() -> Notification:
            guard_buy(value)
            minted = self._mint(caller, value, caller, self._params.investment_ratio)
            return effect_buy(caller, minted, value)

        return self._run(Action.BUY, body)

    def rebuy(self, caller: Identity, value: int) -> Notification:
        """Operator-only mint that sends the whole value to the reserve."""
        def body() -> Notification:
            guard_rebuy(self._params, caller, value)
            minted = self._mint(caller, value, caller, None)
            return effect_rebuy(caller, minted, value)

        return self._run(Action.REBUY, body)

    def pay(self, caller: Identity, value: int, recipient: Optional[Identity] = None) -> Notification:
        """Mint to ``recipient`` (operator if zero); ``distribution_ratio`` to reserve."""
        def body() -> Notification:
            guard_pay(value)
            target = self._params.operator if is_zero_identity(recipient) else recipient
            minted = self._mint(caller, value, target, self._params.distribution_ratio)
            return effect_pay(caller, minted, value, target)

        return self._run(Action.PAY, body)

    def sell(self, caller: Identity, amount: int) -> Notification:
        """Redeem ``amount`` units for native value along the sell curve."""
        def body() -> Notification:
            state = self._state
            supply = self.token.total_supply()
            guard_sell(amount, self.token.balance_of(caller), supply, state.reserve)
            guard_holder(caller)
            proceeds, _, _ = redeem_proceeds(amount, supply, state.reserve, state.burned_amount)
            guard_sell_payout(proceeds, self.held_balance())
            new_state = apply_sell(state, proceeds)
            # Effects before the outbound transfer.
            self.token.burn_from(caller, amount)
            self._state = new_state
            self._send(caller, proceeds)
            return effect_sell(caller, amount, proceeds)

        return self._run(Action.SELL, body)

    def burn(self, caller: Identity, amount: int) -> Notification:
        """Move ``amount`` units to the sink; supply is unchanged."""
        def body() -> Notification:
            guard_burn(amount, self.token.balance_of(caller))
            guard_holder(caller)
            new_state = apply_burn(self._state, amount)
            self.token.transfer(caller, SINK_ADDRESS, amount)
            self._state = new_state
            return effect_burn(caller, amount)

        return self._run(Action.BURN, body)

    # -- Dispatch ------------------------------------------------------------

    def step(self, caller: Identity, params: ActionParams) -> StepResult:
        """Execute one action; rejections are returned, not raised.

        Returns ``StepResult`` with ``accepted=True`` on success, or
        ``accepted=False`` with the error ``code`` as ``rejection``.
        """
        try:
            return self.step_or_raise(caller, params)
        except CurveError as exc:
            return StepResult(accepted=False, rejection=exc.code)

    def step_or_raise(self, caller: Identity, params: ActionParams) -> StepResult:
        """Like ``step()`` but raises the ``CurveError`` on rejection."""
        handler = _DISPATCH.get(params.action)
        if handler is None:
            raise ValueError(f"unknown action: {params.action}")
        notification = handler(self, caller, params)
        return StepResult(accepted=True, state=self._state, notification=notification)


ActionFn = Callable[[CurveToken, Identity, ActionParams], Notification]

_DISPATCH: dict[Action, ActionFn] = {
    Action.BUY: lambda t, caller, p: t.buy(caller, p.value),
    Action.REBUY: lambda t, caller, p: t.rebuy(caller, p.value),
    Action.PAY: lambda t, caller, p: t.pay(caller, p.value, p.recipient),
    Action.SELL: lambda t, caller, p: t.sell(caller, p.amount),
    Action.BURN: lambda t, caller, p: t.burn(caller, p.amount),
}
