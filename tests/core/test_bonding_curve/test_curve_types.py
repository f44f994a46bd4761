"""Tests for CurveParameters validation and LedgerState serialization."""

import pytest

from src.core.bonding_curve import (
    SINK_ADDRESS,
    ZERO_ADDRESS,
    CurveParameters,
    CurveToken,
    InvalidRatio,
    LedgerState,
    SinkAddress,
    ZeroAddress,
    ZeroBuySlope,
    initial_state,
    state_from_dict,
    state_to_dict,
)

OPERATOR = "0x" + "aa" * 20


def _params(**overrides) -> CurveParameters:
    kwargs = dict(buy_slope=10**15, investment_ratio=3000, distribution_ratio=5000, operator=OPERATOR)
    kwargs.update(overrides)
    return CurveParameters(**kwargs)


class TestCurveParameters:
    def test_valid(self):
        p = _params()
        assert p.buy_slope == 10**15
        assert p.operator == OPERATOR

    def test_zero_slope(self):
        with pytest.raises(ZeroBuySlope):
            _params(buy_slope=0)

    @pytest.mark.parametrize("ratio", [0, 10_001, -1])
    def test_investment_ratio_out_of_range(self, ratio):
        with pytest.raises(InvalidRatio) as exc:
            _params(investment_ratio=ratio)
        assert exc.value.value == ratio
        assert exc.value.maximum == 10_000

    @pytest.mark.parametrize("ratio", [1, 10_000])
    def test_ratio_bounds_inclusive(self, ratio):
        assert _params(investment_ratio=ratio, distribution_ratio=ratio).investment_ratio == ratio

    def test_distribution_ratio_out_of_range(self):
        with pytest.raises(InvalidRatio) as exc:
            _params(distribution_ratio=10_001)
        assert exc.value.value == 10_001

    @pytest.mark.parametrize("operator", [ZERO_ADDRESS, "", None])
    def test_zero_operator(self, operator):
        with pytest.raises(ZeroAddress):
            _params(operator=operator)

    @pytest.mark.parametrize("operator", [SINK_ADDRESS, SINK_ADDRESS.upper().replace("0X", "0x")])
    def test_sink_operator(self, operator):
        with pytest.raises(SinkAddress):
            _params(operator=operator)

    def test_check_order(self):
        # Slope is checked first, then investment, then distribution, then operator.
        with pytest.raises(ZeroBuySlope):
            _params(buy_slope=0, investment_ratio=0, operator=ZERO_ADDRESS)
        with pytest.raises(InvalidRatio) as exc:
            _params(investment_ratio=0, distribution_ratio=20_000, operator=ZERO_ADDRESS)
        assert exc.value.value == 0
        with pytest.raises(InvalidRatio) as exc:
            _params(distribution_ratio=20_000, operator=ZERO_ADDRESS)
        assert exc.value.value == 20_000

    def test_immutable(self):
        p = _params()
        with pytest.raises(AttributeError):
            p.buy_slope = 1  # type: ignore[misc]

    def test_create_fails_atomically(self):
        with pytest.raises(ZeroBuySlope):
            CurveToken.create(0, 3000, 5000, OPERATOR)

    def test_engine_identity_cannot_be_sink(self):
        with pytest.raises(ZeroAddress):
            CurveToken(_params(), identity=SINK_ADDRESS)


class TestLedgerStateSerialization:
    def test_initial(self):
        s = initial_state()
        assert s == LedgerState(reserve=0, burned_amount=0)

    def test_round_trip(self):
        s = LedgerState(reserve=3 * 10**17, burned_amount=20)
        assert state_from_dict(state_to_dict(s)) == s

    def test_missing_field(self):
        with pytest.raises(KeyError):
            state_from_dict({"reserve": 1})

    def test_rejects_bool_and_negative(self):
        with pytest.raises(TypeError):
            state_from_dict({"reserve": True, "burned_amount": 0})
        with pytest.raises(ValueError):
            state_from_dict({"reserve": -1, "burned_amount": 0})
