"""Property tests: curve round trip, monotonicity, and ledger invariants under
random operation sequences.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import given, settings

from src.core.bonding_curve import SINK_ADDRESS, Action, ActionParams, CurveToken
from src.core.bonding_curve.errors import CurveArithmeticError
from src.core.bonding_curve.math import MAX_UINT256, floor_sqrt, mint_amount, scaled_mul_div

OPERATOR = "0x" + "aa" * 20
HOLDERS = ["0x" + "a1" * 20, "0x" + "b2" * 20, "0x" + "c3" * 20, OPERATOR]

slopes = st.integers(min_value=1, max_value=10**18)
deposits = st.integers(min_value=1, max_value=10**24)
supplies = st.integers(min_value=0, max_value=10**12)


@settings(max_examples=300, deadline=None)
@given(n=st.integers(min_value=0, max_value=MAX_UINT256))
def test_floor_sqrt_brackets_root(n: int) -> None:
    s = floor_sqrt(n)
    assert s * s <= n < (s + 1) * (s + 1)


@settings(max_examples=300, deadline=None)
@given(
    x=st.integers(min_value=0, max_value=MAX_UINT256),
    y=st.integers(min_value=0, max_value=MAX_UINT256),
    d=st.integers(min_value=1, max_value=MAX_UINT256),
)
def test_scaled_mul_div_is_exact_floor(x: int, y: int, d: int) -> None:
    expected = (x * y) // d
    if expected > MAX_UINT256:
        with pytest.raises(CurveArithmeticError):
            scaled_mul_div(x, y, d)
    else:
        assert scaled_mul_div(x, y, d) == expected


@settings(max_examples=300, deadline=None)
@given(c=deposits, a=supplies, slope=slopes)
def test_mint_round_trip(c: int, a: int, slope: int) -> None:
    k = (2 * c) // slope
    try:
        x = mint_amount(c, a, slope)
    except CurveArithmeticError:
        # Only rejected when the deposit cannot lift the root past a.
        assert k + a * a < (a + 1) * (a + 1)
        return
    assert x > 0
    assert (a + x) * (a + x) <= k + a * a < (a + x + 1) * (a + x + 1)


@settings(max_examples=200, deadline=None)
@given(c=deposits, a=supplies, slope=slopes, bump=st.integers(min_value=1, max_value=10**6))
def test_mint_non_increasing_in_supply(c: int, a: int, slope: int, bump: int) -> None:
    def minted(supply: int) -> int:
        try:
            return mint_amount(c, supply, slope)
        except CurveArithmeticError:
            return 0

    assert minted(a + bump) <= minted(a)


_actions = st.one_of(
    st.tuples(st.just(Action.BUY), st.sampled_from(HOLDERS), st.integers(min_value=0, max_value=5 * 10**18)),
    st.tuples(st.just(Action.REBUY), st.sampled_from(HOLDERS), st.integers(min_value=0, max_value=5 * 10**18)),
    st.tuples(st.just(Action.PAY), st.sampled_from(HOLDERS), st.integers(min_value=0, max_value=5 * 10**18)),
    st.tuples(st.just(Action.SELL), st.sampled_from(HOLDERS), st.integers(min_value=0, max_value=60)),
    st.tuples(st.just(Action.BURN), st.sampled_from(HOLDERS), st.integers(min_value=0, max_value=60)),
)


def _params(action: Action, qty: int, recipient: str) -> ActionParams:
    if action in (Action.SELL, Action.BURN):
        return ActionParams(action=action, amount=qty)
    return ActionParams(action=action, value=qty, recipient=recipient)


@settings(max_examples=150, deadline=None)
@given(ops=st.lists(st.tuples(_actions, st.sampled_from(HOLDERS + [SINK_ADDRESS])), min_size=1, max_size=40))
def test_ledger_invariants_hold_for_any_sequence(ops) -> None:
    t = CurveToken.create(10**15, 3000, 5000, OPERATOR)
    for who in HOLDERS:
        t.native.credit(who, 10**21)

    burned = 0
    for (action, caller, qty), recipient in ops:
        before = (t.state, t.token.get_all_balances(), t.native.snapshot())
        supply = t.total_supply()
        result = t.step(caller, _params(action, qty, recipient))
        if not result.accepted:
            assert (t.state, t.token.get_all_balances(), t.native.snapshot()) == before
        if action is Action.REBUY and caller != OPERATOR:
            assert result.rejection == "OnlyOrganization"
        if action is Action.SELL and 0 < qty and qty >= supply:
            assert result.rejection in ("ExceedsTotalSupply", "InsufficientBalance")

        assert t.circulating_supply() + t.burned_amount() == t.total_supply()
        assert 0 <= t.reserve() <= t.held_balance()
        assert t.burned_amount() >= burned
        assert t.sink_balance() == t.burned_amount()
        assert t.token.verify_supply()
        burned = t.burned_amount()
