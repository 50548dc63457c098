"""Fixed-payment loan math: payment, amortization schedule and APR with fees.

The monthly payment uses the standard annuity formula

    payment = P * i * (1 + i)^n / ((1 + i)^n - 1)

with ``i`` the monthly rate and ``n`` the number of payments; a zero rate
degenerates to ``P / n``.

The APR calculation answers a different question than the nominal rate: the
contractual payment is computed on the financed amount (principal plus loaned
fees), but the borrower only walks away with the principal minus upfront fees.
The effective APR is the rate at which the present value of those payments
equals what was actually received.

Example
-------

>>> round(monthly_payment(10000, 6, 36), 2)
304.22
>>> round(monthly_payment(10000, 0, 36), 2)
277.78
"""

from __future__ import annotations

import logging
from typing import List

from fincalc.config import APR_RATE_FLOOR, APR_TOLERANCE
from fincalc.core.rate_solver import SolverResult, initial_rate_guess, solve_rate
from fincalc.domain.errors import raise_if_errors
from fincalc.schemas.loans import (
    AmortizationRequest,
    AmortizationResponse,
    AmortizationRow,
    AprResponse,
    LoanTerms,
)

logger = logging.getLogger(__name__)


def periodic_payment(principal: float, periodic_rate: float, periods: int) -> float:
    """Return the level payment that retires ``principal`` over ``periods``."""
    if periods <= 0:
        raise ValueError("Number of payments must be positive")
    if periodic_rate == 0:
        return principal / periods
    factor = (1 + periodic_rate) ** periods
    return principal * periodic_rate * factor / (factor - 1)


def monthly_payment(principal: float, annual_rate_percent: float, months: int) -> float:
    """Monthly payment for a nominal annual rate given in percent."""
    return periodic_payment(principal, annual_rate_percent / 100 / 12, months)


def amortization_schedule(principal: float, annual_rate_percent: float, months: int) -> List[AmortizationRow]:
    """Build the month-by-month schedule of a fixed-payment loan.

    The running balance keeps full precision; only the fields written to each
    row are rounded to cents. Summing the rounded principal column can
    therefore differ from ``principal`` by a few cents.
    """
    payment = monthly_payment(principal, annual_rate_percent, months)
    monthly_rate = annual_rate_percent / 100 / 12
    balance = principal
    rows: List[AmortizationRow] = []

    for period in range(1, months + 1):
        interest = balance * monthly_rate
        principal_portion = payment - interest
        balance -= principal_portion

        rows.append(
            AmortizationRow(
                period=period,
                payment=round(payment, 2),
                principal_portion=round(principal_portion, 2),
                interest_portion=round(interest, 2),
                ending_balance=max(0.0, round(balance, 2)),
            )
        )

    return rows


def calculate_amortization(request: AmortizationRequest) -> AmortizationResponse:
    errors: List[str] = []
    if request.principal <= 0:
        errors.append("Loan amount must be greater than 0")
    if request.annual_rate_percent < 0:
        errors.append("Interest rate cannot be negative")
    if request.term_months <= 0:
        errors.append("Loan term must be at least 1 month")
    raise_if_errors(errors)

    payment = monthly_payment(request.principal, request.annual_rate_percent, request.term_months)
    schedule = amortization_schedule(request.principal, request.annual_rate_percent, request.term_months)
    total_payments = payment * request.term_months
    logger.debug("amortization schedule built: %d rows", len(schedule))

    return AmortizationResponse(
        monthly_payment=round(payment, 2),
        total_payments=round(total_payments, 2),
        total_interest=round(total_payments - request.principal, 2),
        schedule=schedule,
    )


def present_value_of_payments(payment: float, annual_rate: float, months: int) -> float:
    """Discount ``months`` level payments at ``annual_rate / 12`` (decimal rate)."""
    monthly_rate = annual_rate / 12
    return sum(payment * (1 + monthly_rate) ** -month for month in range(1, months + 1))


def present_value_slope(payment: float, annual_rate: float, months: int) -> float:
    """Derivative of ``present_value_of_payments`` with respect to the annual rate."""
    monthly_rate = annual_rate / 12
    return sum(
        payment * -month * (1 + monthly_rate) ** (-month - 1) / 12 for month in range(1, months + 1)
    )


def _validate_terms(terms: LoanTerms) -> None:
    errors: List[str] = []
    if terms.principal <= 0:
        errors.append("Loan amount must be greater than 0")
    if terms.nominal_annual_rate_percent < 0:
        errors.append("Interest rate cannot be negative")
    if terms.term_months <= 0:
        errors.append("Loan term must be at least 1 month")
    if terms.loaned_fees < 0:
        errors.append("Loaned fees cannot be negative")
    if terms.upfront_fees < 0:
        errors.append("Upfront fees cannot be negative")
    if terms.principal > 0 and terms.upfront_fees >= terms.principal:
        errors.append("Upfront fees must be less than the loan amount")
    raise_if_errors(errors)


def _solve_apr(terms: LoanTerms, payment: float, strict: bool) -> SolverResult:
    months = terms.term_months
    net_received = terms.net_received
    start = terms.nominal_annual_rate_percent / 100
    if start <= 0:
        start = initial_rate_guess(net_received, payment, months) * 12

    return solve_rate(
        lambda rate: present_value_of_payments(payment, rate, months),
        net_received,
        start,
        tolerance=APR_TOLERANCE,
        floor=APR_RATE_FLOOR,
        derivative=lambda rate: present_value_slope(payment, rate, months),
        strict=strict,
    )


def effective_apr(terms: LoanTerms, strict: bool = False) -> float:
    """Annual percentage rate including fees, in percent.

    With no fees at all the APR is the nominal rate by definition and no solve
    is attempted.
    """
    _validate_terms(terms)
    if terms.total_fees == 0:
        return terms.nominal_annual_rate_percent

    payment = monthly_payment(terms.amount_financed, terms.nominal_annual_rate_percent, terms.term_months)
    return _solve_apr(terms, payment, strict).rate * 100


def calculate_apr(terms: LoanTerms, strict: bool = False) -> AprResponse:
    """Full APR breakdown for a loan with loaned and/or upfront fees."""
    _validate_terms(terms)

    amount_financed = terms.amount_financed
    payment = monthly_payment(amount_financed, terms.nominal_annual_rate_percent, terms.term_months)
    total_payments = payment * terms.term_months
    total_interest = total_payments - amount_financed
    total_cost = total_payments + terms.upfront_fees

    apr = terms.nominal_annual_rate_percent
    converged = True
    iterations = 0
    if terms.total_fees > 0:
        result = _solve_apr(terms, payment, strict)
        apr = result.rate * 100
        converged = result.converged
        iterations = result.iterations

    return AprResponse(
        nominal_rate=terms.nominal_annual_rate_percent,
        effective_apr=round(apr, 3),
        monthly_payment=round(payment, 2),
        total_payments=round(total_payments, 2),
        total_interest=round(total_interest, 2),
        total_fees=terms.total_fees,
        amount_financed=amount_financed,
        net_amount_received=terms.net_received,
        total_cost=round(total_cost, 2),
        converged=converged,
        iterations=iterations,
    )


__all__ = [
    "periodic_payment",
    "monthly_payment",
    "amortization_schedule",
    "calculate_amortization",
    "present_value_of_payments",
    "present_value_slope",
    "effective_apr",
    "calculate_apr",
]
