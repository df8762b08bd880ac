"""Tests for the position size calculator and risk profiles.

**Feature: position-sizing**
"""

import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analytics import (
    PIP_VALUES,
    calculate_position_size,
    pip_value_for,
    project_risk_profile,
)
from tradejournal.errors import InvalidInputError
from tradejournal.models import RiskProfile


class TestCalculatePositionSize:

    def test_basic_sizing(self):
        result = calculate_position_size(10000, 2, 50, 0.1)

        assert result.risk_amount == 200.00
        assert result.position_size == 40.0
        assert result.potential_profit is None
        assert result.risk_reward_ratio is None

    def test_take_profit(self):
        result = calculate_position_size(10000, 2, 50, 0.1, take_profit_distance=100)

        assert result.potential_profit == 400.00
        assert result.risk_reward_ratio == 2.0

    def test_rounding_only_on_output(self):
        result = calculate_position_size(1000, 1, 30, 0.091)

        assert result.risk_amount == 10.00
        assert result.position_size == round(10 / (30 * 0.091), 4)

    @pytest.mark.parametrize(
        "balance,risk,sl,pip",
        [
            (0, 2, 50, 0.1),
            (-100, 2, 50, 0.1),
            (10000, 0, 50, 0.1),
            (10000, 2, 0, 0.1),
            (10000, 2, -5, 0.1),
            (10000, 2, 50, 0),
            (None, 2, 50, 0.1),
            (10000, 2, None, 0.1),
            (10000, 150, 50, 0.1),
            (float("nan"), 2, 50, 0.1),
            (10000, 2, float("inf"), 0.1),
        ],
    )
    def test_invalid_inputs(self, balance, risk, sl, pip):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_position_size(balance, risk, sl, pip)

        assert len(exc_info.value.problems) == 1

    def test_invalid_take_profit(self):
        with pytest.raises(InvalidInputError):
            calculate_position_size(10000, 2, 50, 0.1, take_profit_distance=0)

    def test_collects_every_problem(self):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_position_size(0, None, -1, 0.1)

        problems = exc_info.value.problems
        assert len(problems) == 3
        assert str(exc_info.value) == "; ".join(problems)

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            calculate_position_size(10000, 2, 0, 0.1)

    @given(
        balance=st.floats(min_value=100, max_value=1_000_000),
        risk=st.floats(min_value=0.1, max_value=10),
        sl=st.floats(min_value=1, max_value=500),
        pip=st.floats(min_value=0.01, max_value=10),
    )
    @settings(max_examples=100)
    def test_size_reproduces_risk_amount(self, balance, risk, sl, pip):
        """
        *For any* valid inputs, size x stop distance x pip value gives back
        the risk amount, up to output rounding.
        """
        result = calculate_position_size(balance, risk, sl, pip)

        reproduced = result.position_size * sl * pip
        assert math.isclose(result.risk_amount, balance * risk / 100, abs_tol=0.005)
        assert abs(reproduced - balance * risk / 100) <= 5e-5 * sl * pip + 1e-6

    @given(
        sl=st.floats(min_value=1, max_value=500),
        tp=st.floats(min_value=1, max_value=1000),
    )
    @settings(max_examples=50)
    def test_ratio_is_distance_ratio(self, sl, tp):
        """Risk:reward equals take profit distance over stop distance."""
        result = calculate_position_size(10000, 1, sl, 0.1, take_profit_distance=tp)

        assert math.isclose(result.risk_reward_ratio, round(tp / sl, 2), abs_tol=0.011)


class TestPipValues:

    def test_known_instruments(self):
        assert pip_value_for("XAUUSD") == 0.1
        assert pip_value_for(" usdjpy ") == 0.091
        assert pip_value_for("USDCAD") == 0.075
        assert len(PIP_VALUES) == 10

    def test_unknown_instrument(self):
        with pytest.raises(InvalidInputError):
            pip_value_for("BTCUSD")


class TestRiskProfileProjection:

    def test_projection(self):
        profile = RiskProfile(
            owner_id="user-1",
            name="challenge",
            account_balance=10000,
            risk_percent=1,
            reward_ratio=2,
            trades_per_day=3,
        )

        projection = project_risk_profile(profile)

        assert projection.risk_amount == 100
        assert projection.reward_amount == 200
        assert projection.daily_loss_limit == 300
        assert projection.monthly_projection == 3300

    def test_break_even_ratio_projects_zero(self):
        profile = RiskProfile(
            owner_id="user-1", name="flat", account_balance=5000, risk_percent=2, reward_ratio=1
        )

        assert project_risk_profile(profile).monthly_projection == 0

    @pytest.mark.parametrize(
        "field,value",
        [("account_balance", 0), ("risk_percent", 0), ("risk_percent", 101), ("trades_per_day", 0)],
    )
    def test_profile_validation(self, field, value):
        values = {"owner_id": "user-1", "name": "p", "account_balance": 1000, "risk_percent": 1}
        values[field] = value

        with pytest.raises(ValueError):
            RiskProfile(**values)
