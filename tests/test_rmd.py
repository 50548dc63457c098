from __future__ import annotations

from datetime import date
from math import isclose

import pytest

from fincalc.core.rmd import (
    calculate_rmd,
    compute_rmd,
    distribution_period,
    is_rmd_required,
    joint_period,
    project_rmds,
    rmd_deadline,
    rmd_start_age,
    uniform_period,
)
from fincalc.domain.errors import InputValidationError
from fincalc.schemas.rmd import RMDRequest


def test_reference_case():
    result = calculate_rmd(RMDRequest(birth_year=1949, rmd_year=2024, account_balance=500000))

    assert result.current_age == 75
    assert result.rmd_required
    assert result.distribution_period == 24.6
    assert isclose(result.rmd_amount, 20325.20, abs_tol=0.01)
    assert result.table_used == "Uniform"
    assert result.rmd_start_age == 72
    assert result.rmd_start_year == 2021
    assert result.first_rmd_deadline == date(2022, 4, 1)
    assert result.rmd_deadline == date(2024, 12, 31)


def test_start_age_depends_on_birth_year():
    assert rmd_start_age(1950) == 72
    assert rmd_start_age(1951) == 73
    assert not is_rmd_required(1951, 2023)
    assert is_rmd_required(1951, 2024)


def test_first_distribution_may_wait_until_april():
    assert rmd_deadline(1951, 2024) == date(2025, 4, 1)
    assert rmd_deadline(1951, 2025) == date(2025, 12, 31)


def test_uniform_periods_never_increase():
    periods = [uniform_period(age) for age in range(73, 121)]

    assert all(later <= earlier for earlier, later in zip(periods, periods[1:]))
    assert periods[-1] == 2.0
    assert uniform_period(125) == 2.0


def test_no_period_below_table():
    with pytest.raises(InputValidationError):
        uniform_period(70)


def test_joint_table_for_much_younger_spouse():
    period, table = distribution_period(75, has_spouse_beneficiary=True, spouse_age=60)

    assert table == "Joint"
    assert period == 26.8
    assert compute_rmd(100000, 75, True, 60) < compute_rmd(100000, 75)


def test_joint_table_falls_back_to_single_life():
    period, table = distribution_period(90, has_spouse_beneficiary=True, spouse_age=50)

    assert table == "Joint"
    assert period == 36.2


def test_joint_period_never_rises_across_table_gaps():
    # (77, 61) is listed; (78, 62) falls back to the single-life value for 60
    assert joint_period(77, 61) == 24.2
    assert joint_period(78, 62) == 24.2
    periods = [distribution_period(age, True, age - 16)[0] for age in range(72, 100)]

    assert all(later <= earlier for earlier, later in zip(periods, periods[1:]))


def test_projection_with_much_younger_spouse_never_raises_period():
    result = calculate_rmd(
        RMDRequest(
            birth_year=1947,
            rmd_year=2023,
            account_balance=500000,
            has_spouse_beneficiary=True,
            spouse_birth_year=1963,
            estimated_return_rate=0,
            years_to_project=6,
        )
    )

    periods = [row.distribution_period for row in result.projections]
    assert periods == [25.9, 24.2, 24.2, 24.2, 24.2, 22.9]

def test_spouse_within_ten_years_uses_uniform_table():
    assert distribution_period(75, has_spouse_beneficiary=True, spouse_age=70) == (24.6, "Uniform")


def test_owner_below_start_age_has_no_rmd():
    result = calculate_rmd(RMDRequest(birth_year=1960, rmd_year=2024, account_balance=250000))

    assert not result.rmd_required
    assert result.rmd_amount == 0
    assert result.distribution_period is None
    assert result.rmd_start_age == 73


def test_projection_withdraws_then_grows():
    result = calculate_rmd(
        RMDRequest(
            birth_year=1949,
            rmd_year=2024,
            account_balance=500000,
            estimated_return_rate=5,
            years_to_project=5,
        )
    )

    assert len(result.projections) == 5
    first = result.projections[0]
    assert isclose(first.rmd_amount, 20325.20, abs_tol=0.01)
    assert isclose(first.ending_balance, (500000 - first.rmd_amount) * 1.05)
    for previous, current in zip(result.projections, result.projections[1:]):
        assert current.beginning_balance == previous.ending_balance
        assert current.age == previous.age + 1
    assert isclose(result.total_rmds, sum(row.rmd_amount for row in result.projections))
    assert isclose(result.average_rmd, result.total_rmds / 5)
    assert result.final_balance == result.projections[-1].ending_balance


def test_projection_stops_at_age_limit():
    rows = project_rmds(100000, 118, 2024, 10, 0, 73)

    assert [row.age for row in rows] == [118, 119, 120]
    assert rows[-1].distribution_period == 2.0


def test_projection_before_start_age_has_no_withdrawals():
    rows = project_rmds(100000, 70, 2024, 4, 0, 73)

    assert [row.rmd_amount for row in rows[:3]] == [0, 0, 0]
    assert rows[0].distribution_period is None
    assert rows[3].rmd_amount > 0


def test_invalid_request():
    with pytest.raises(InputValidationError) as excinfo:
        calculate_rmd(RMDRequest(birth_year=1800, rmd_year=1700, account_balance=-5))

    assert "Account balance cannot be negative" in excinfo.value.errors
