from __future__ import annotations

from math import isclose

import pytest

from fincalc.core.interest_rate import calculate_interest_rate, verify_interest_rate
from fincalc.domain.errors import InputValidationError
from fincalc.schemas.loans import InterestRateRequest


def test_recovers_known_rate():
    result = calculate_interest_rate(InterestRateRequest(principal=10000, term_months=36, monthly_payment=304.22))

    assert result.converged
    assert isclose(result.annual_interest_rate, 6.0, abs_tol=0.01)
    assert isclose(result.monthly_rate, 0.005, abs_tol=1e-5)
    assert isclose(result.total_payment, 304.22 * 36)
    assert isclose(result.total_interest, 304.22 * 36 - 10000)


def test_verify_is_inverse_of_solve():
    result = calculate_interest_rate(InterestRateRequest(principal=250000, term_months=360, monthly_payment=1500))

    assert isclose(verify_interest_rate(250000, result.annual_interest_rate, 360), 1500, abs_tol=0.01)


def test_payment_too_low_is_rejected():
    with pytest.raises(InputValidationError) as excinfo:
        calculate_interest_rate(InterestRateRequest(principal=10000, term_months=36, monthly_payment=200))

    assert excinfo.value.errors == ["Monthly payment is too low to repay the loan within the specified term"]


def test_non_positive_inputs_are_rejected():
    with pytest.raises(InputValidationError, match="All inputs must be positive numbers"):
        calculate_interest_rate(InterestRateRequest(principal=-1, term_months=36, monthly_payment=100))
