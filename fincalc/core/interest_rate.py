"""Reverse interest-rate calculator.

Given a loan amount, a term and the monthly payment being charged, recover the
nominal annual rate by inverting the annuity formula

    P = M * (1 - (1 + r)^-n) / r

with the shared Newton-Raphson solver and a finite-difference derivative.
A payment below ``principal / term`` can never retire the loan at a
non-negative rate, so it is rejected before any iteration.
"""

from __future__ import annotations

import logging
from typing import List

from fincalc.config import MONTHLY_RATE_FLOOR, RATE_TOLERANCE
from fincalc.core.amortization import periodic_payment
from fincalc.core.rate_solver import initial_rate_guess, solve_rate
from fincalc.domain.errors import raise_if_errors
from fincalc.schemas.loans import InterestRateRequest, InterestRateResponse

logger = logging.getLogger(__name__)


def _validate(request: InterestRateRequest) -> None:
    errors: List[str] = []
    if request.principal <= 0 or request.term_months <= 0 or request.monthly_payment <= 0:
        errors.append("All inputs must be positive numbers")
    elif request.monthly_payment < request.principal / request.term_months:
        errors.append("Monthly payment is too low to repay the loan within the specified term")
    raise_if_errors(errors)


def calculate_interest_rate(request: InterestRateRequest, strict: bool = False) -> InterestRateResponse:
    """Solve for the nominal annual rate implied by ``request``."""
    _validate(request)

    principal = request.principal
    months = request.term_months
    target = request.monthly_payment

    result = solve_rate(
        lambda rate: periodic_payment(principal, rate, months),
        target,
        initial_rate_guess(principal, target, months),
        tolerance=RATE_TOLERANCE,
        floor=MONTHLY_RATE_FLOOR,
        strict=strict,
    )

    total_payment = target * months
    logger.debug("interest rate solved in %d iterations", result.iterations)

    return InterestRateResponse(
        annual_interest_rate=result.rate * 12 * 100,
        monthly_rate=result.rate,
        total_payment=total_payment,
        total_interest=total_payment - principal,
        converged=result.converged,
        iterations=result.iterations,
    )


def verify_interest_rate(principal: float, annual_rate_percent: float, months: int) -> float:
    """Payment implied by ``annual_rate_percent``; the inverse of the solve above."""
    return periodic_payment(principal, annual_rate_percent / 100 / 12, months)


__all__ = ["calculate_interest_rate", "verify_interest_rate"]
