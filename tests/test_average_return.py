from __future__ import annotations

from math import isclose

import pytest

from fincalc.core.average_return import (
    annualized_return,
    calculate_average_return,
    geometric_mean,
)
from fincalc.domain.errors import InputValidationError
from fincalc.schemas.returns import AverageReturnRequest, ReturnPeriod


def yearly(*returns):
    return [ReturnPeriod(return_percent=value, years=1) for value in returns]


def test_equal_yearly_periods():
    result = calculate_average_return(AverageReturnRequest(periods=yearly(10, 5, 8, 12)))

    assert isclose(result.arithmetic_mean, 8.75)
    assert isclose(result.geometric_mean, 8.72, abs_tol=0.005)
    assert isclose(result.annualized_return, result.geometric_mean)
    assert isclose(result.cumulative_return, 39.71, abs_tol=0.005)
    assert result.total_periods == 4
    assert result.total_years == 4


def test_negative_return_lowers_geometric_mean():
    result = calculate_average_return(AverageReturnRequest(periods=yearly(20, -15, 10)))

    assert isclose(result.arithmetic_mean, 5.0)
    assert isclose(result.geometric_mean, 3.91, abs_tol=0.005)
    assert isclose(result.cumulative_return, 12.2, abs_tol=0.005)
    assert result.geometric_mean < result.arithmetic_mean


def test_mixed_lengths_annualize_over_elapsed_time():
    periods = [
        ReturnPeriod(return_percent=15, years=2),
        ReturnPeriod(return_percent=8, years=1, months=6),
        ReturnPeriod(return_percent=20, years=3),
    ]

    result = calculate_average_return(AverageReturnRequest(periods=periods))

    assert result.total_years == 6.5
    assert isclose(result.cumulative_return, 49.04, abs_tol=0.005)
    assert isclose(result.annualized_return, (1.4904 ** (1 / 6.5) - 1) * 100, abs_tol=1e-6)


def test_sub_year_periods():
    periods = [
        ReturnPeriod(return_percent=5, months=6),
        ReturnPeriod(return_percent=3, months=3),
        ReturnPeriod(return_percent=8, months=9),
    ]

    result = calculate_average_return(AverageReturnRequest(periods=periods))

    assert result.total_years == 1.5
    assert isclose(result.cumulative_return, 16.8, abs_tol=0.005)


def test_single_period_geometric_mean_is_its_return():
    assert geometric_mean(yearly(18.5)) == 18.5


def test_zero_length_periods_do_not_annualize():
    assert annualized_return([ReturnPeriod(return_percent=10)]) == 0.0


def test_empty_input_is_all_zero():
    result = calculate_average_return(AverageReturnRequest())

    assert result.arithmetic_mean == 0
    assert result.geometric_mean == 0
    assert result.annualized_return == 0
    assert result.cumulative_return == 0
    assert result.total_periods == 0


def test_invalid_periods():
    periods = [ReturnPeriod(return_percent=-100, years=1), ReturnPeriod(return_percent=5, years=1, months=12)]

    with pytest.raises(InputValidationError) as excinfo:
        calculate_average_return(AverageReturnRequest(periods=periods))

    assert len(excinfo.value.errors) == 2
