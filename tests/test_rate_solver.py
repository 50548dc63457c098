from __future__ import annotations

import logging
from math import isclose

import pytest

from fincalc.config import INITIAL_GUESS_BOUNDS
from fincalc.core.rate_solver import forward_difference, initial_rate_guess, solve_rate
from fincalc.domain.errors import ConvergenceError


def test_linear_function_converges_with_finite_difference():
    result = solve_rate(lambda r: 100 * (1 + r), 110.0, 0.05, tolerance=1e-9, floor=1e-5)

    assert result.converged
    assert not result.stalled
    assert isclose(result.rate, 0.1, abs_tol=1e-6)


def test_analytic_derivative_is_used_when_given():
    calls = []

    def slope(rate):
        calls.append(rate)
        return 3 * rate**2

    result = solve_rate(lambda r: r**3, 8.0, 1.5, tolerance=1e-10, floor=1e-5, derivative=slope)

    assert result.converged
    assert isclose(result.rate, 2.0, abs_tol=1e-8)
    assert calls, "analytic derivative should be evaluated"


def test_flat_function_stalls_and_returns_best_effort(caplog):
    with caplog.at_level(logging.WARNING, logger="fincalc.core.rate_solver"):
        result = solve_rate(lambda r: 5.0, 10.0, 0.02, tolerance=1e-9, floor=1e-5)

    assert result.stalled
    assert not result.converged
    assert result.rate == 0.02
    assert "did not converge" in caplog.text


def test_strict_solve_raises_on_stall():
    with pytest.raises(ConvergenceError) as excinfo:
        solve_rate(lambda r: 5.0, 10.0, 0.02, tolerance=1e-9, floor=1e-5, strict=True)

    assert excinfo.value.rate == 0.02
    assert excinfo.value.iterations == 0
    assert isinstance(excinfo.value, ValueError)


def test_negative_step_is_reset_to_floor():
    result = solve_rate(
        lambda r: r,
        -1.0,
        0.5,
        tolerance=1e-9,
        floor=0.01,
        derivative=lambda r: 1.0,
        max_iterations=5,
    )

    assert result.rate == 0.01
    assert result.iterations == 5
    assert not result.converged


def test_initial_guess_is_clamped():
    low, high = INITIAL_GUESS_BOUNDS

    assert isclose(initial_rate_guess(10000, 278.0, 36), low / 12)
    assert isclose(initial_rate_guess(10000, 5000.0, 36), high / 12)
    assert isclose(initial_rate_guess(10000, 304.22, 36), (304.22 * 36 - 10000) / 10000 / 3 / 12)


def test_forward_difference_approximates_slope():
    slope = forward_difference(lambda r: r**2)

    assert isclose(slope(3.0), 6.0, abs_tol=1e-5)
