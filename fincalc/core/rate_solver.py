"""Bounded Newton-Raphson root finder for loan-rate problems.

Both the APR-with-fees calculation and the reverse interest-rate calculation
need to find a rate ``r`` such that some payment-like function ``f(r)`` hits a
target value. This module holds the single iteration loop they share; callers
plug in the function, the target, the derivative strategy and the clamp floor.

Policy
------

* At most ``MAX_ITERATIONS`` steps; each step is
  ``rate <- rate - (f(rate) - target) / f'(rate)``.
* ``f'`` is either an analytic derivative supplied by the caller or a forward
  finite difference ``(f(rate + step) - f(rate)) / step``.
* A step that lands below zero is reset to ``floor``.
* When ``|f'|`` drops below ``MIN_DERIVATIVE`` the iteration stops and the
  current estimate is returned with ``stalled=True``.
* Non-strict solves return the last iterate with ``converged=False`` when the
  tolerance is never met; strict solves raise ``ConvergenceError``.

Example
-------

>>> result = solve_rate(lambda r: 100 * (1 + r), 110.0, 0.05, tolerance=1e-9, floor=1e-5)
>>> round(result.rate, 6), result.converged
(0.1, True)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from fincalc.config import (
    FINITE_DIFFERENCE_STEP,
    INITIAL_GUESS_BOUNDS,
    MAX_ITERATIONS,
    MIN_DERIVATIVE,
)
from fincalc.domain.errors import ConvergenceError

logger = logging.getLogger(__name__)

RateFunction = Callable[[float], float]


@dataclass(frozen=True)
class SolverResult:
    """Outcome of one rate solve."""

    rate: float
    iterations: int
    residual: float
    converged: bool
    stalled: bool = False


def initial_rate_guess(principal: float, payment: float, periods: int, periods_per_year: int = 12) -> float:
    """Return a per-period starting rate for a loan of ``periods`` payments.

    The guess spreads the total interest implied by ``payment`` evenly over the
    term, clamps the annualized figure to ``INITIAL_GUESS_BOUNDS`` and converts
    it back to a per-period rate.
    """
    total_interest = payment * periods - principal
    years = periods / periods_per_year
    guess = total_interest / principal / years
    low, high = INITIAL_GUESS_BOUNDS
    guess = max(low, min(high, guess))
    return guess / periods_per_year


def forward_difference(payment_fn: RateFunction, step: float = FINITE_DIFFERENCE_STEP) -> RateFunction:
    """Build a numerical derivative of ``payment_fn``."""

    def slope(rate: float) -> float:
        return (payment_fn(rate + step) - payment_fn(rate)) / step

    return slope


def solve_rate(
    payment_fn: RateFunction,
    target: float,
    initial_rate: float,
    *,
    tolerance: float,
    floor: float,
    derivative: Optional[RateFunction] = None,
    step: float = FINITE_DIFFERENCE_STEP,
    max_iterations: int = MAX_ITERATIONS,
    strict: bool = False,
) -> SolverResult:
    """Find ``rate`` such that ``payment_fn(rate)`` is within ``tolerance`` of ``target``.

    Parameters
    ----------
    payment_fn : callable
        Function of the rate being solved for.
    target : float
        Value ``payment_fn`` must reach.
    initial_rate : float
        Starting estimate, in the same unit ``payment_fn`` expects.
    tolerance : float
        Absolute tolerance on ``payment_fn(rate) - target``.
    floor : float
        Rate used whenever a Newton step goes negative.
    derivative : callable, optional
        Analytic derivative of ``payment_fn``. A forward finite difference is
        used when omitted.
    step : float, optional
        Probe width of the finite difference.
    max_iterations : int, optional
        Upper bound on Newton steps.
    strict : bool, optional
        Raise ``ConvergenceError`` instead of returning a best-effort rate.

    Returns
    -------
    SolverResult
        The final rate together with convergence diagnostics.
    """
    slope_fn = derivative or forward_difference(payment_fn, step)
    rate = initial_rate
    residual = payment_fn(rate) - target

    for iteration in range(max_iterations):
        if abs(residual) < tolerance:
            logger.debug("rate solve converged: rate=%.10f iterations=%d residual=%.3e", rate, iteration, residual)
            return SolverResult(rate=rate, iterations=iteration, residual=residual, converged=True)

        slope = slope_fn(rate)
        if abs(slope) < MIN_DERIVATIVE:
            return _give_up(
                SolverResult(rate=rate, iterations=iteration, residual=residual, converged=False, stalled=True),
                "derivative collapsed",
                strict,
            )

        rate = rate - residual / slope
        if rate < 0:
            rate = floor
        residual = payment_fn(rate) - target

    if abs(residual) < tolerance:
        return SolverResult(rate=rate, iterations=max_iterations, residual=residual, converged=True)

    return _give_up(
        SolverResult(rate=rate, iterations=max_iterations, residual=residual, converged=False),
        "iteration limit reached",
        strict,
    )


def _give_up(result: SolverResult, reason: str, strict: bool) -> SolverResult:
    message = f"rate solve did not converge ({reason}) after {result.iterations} iterations"
    if strict:
        raise ConvergenceError(message, rate=result.rate, iterations=result.iterations)
    logger.warning("%s; returning best estimate %.10f (residual %.3e)", message, result.rate, result.residual)
    return result


__all__ = ["SolverResult", "initial_rate_guess", "forward_difference", "solve_rate"]
