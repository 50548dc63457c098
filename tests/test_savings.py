from __future__ import annotations

from math import exp, isclose

import pytest

from fincalc.core.savings import PERIODS_PER_YEAR, calculate_savings, effective_monthly_rate
from fincalc.domain.errors import InputValidationError, UnsupportedOptionError
from fincalc.schemas.savings import CompoundFrequency, SavingsRequest


def test_every_frequency_has_a_period_count():
    assert set(PERIODS_PER_YEAR) == set(CompoundFrequency)


@pytest.mark.parametrize(
    "frequency, expected",
    [
        ("monthly", 1000 * (1 + 0.05 / 12) ** 12),
        ("annually", 1050.0),
        ("quarterly", 1000 * (1 + 0.05 / 4) ** 4),
        ("daily", 1000 * (1 + 0.05 / 365) ** 365),
        ("continuous", 1000 * exp(0.05)),
    ],
)
def test_one_year_of_growth_matches_closed_form(frequency, expected):
    result = calculate_savings(
        SavingsRequest(initial_deposit=1000, annual_rate_percent=5, compound_frequency=frequency, years_to_grow=1)
    )

    assert isclose(result.final_balance, expected, abs_tol=1e-6)


def test_unknown_frequency_string_is_rejected():
    with pytest.raises(UnsupportedOptionError):
        effective_monthly_rate(5, "hourly")


def test_zero_rate_accumulates_contributions_only():
    result = calculate_savings(
        SavingsRequest(initial_deposit=1000, monthly_contribution=100, annual_rate_percent=0, years_to_grow=2)
    )

    assert isclose(result.final_balance, 1000 + 100 * 24)
    assert isclose(result.total_contributions, 2400)
    assert result.total_interest == 0


def test_contribution_escalation_applies_per_year():
    result = calculate_savings(
        SavingsRequest(
            annual_contribution=1000,
            annual_rate_percent=0,
            years_to_grow=2,
            contribution_increase_rate_percent=10,
        )
    )

    assert isclose(result.total_contributions, 2100)
    assert [row.deposits for row in result.annual_schedule] == pytest.approx([1000, 1100])


def test_tax_is_withheld_from_interest():
    untaxed = calculate_savings(SavingsRequest(initial_deposit=10000, annual_rate_percent=6, years_to_grow=5))
    taxed = calculate_savings(
        SavingsRequest(initial_deposit=10000, annual_rate_percent=6, years_to_grow=5, tax_rate_percent=25)
    )

    assert taxed.final_balance < untaxed.final_balance
    assert taxed.total_tax_paid > 0
    assert isclose(taxed.final_balance, 10000 + taxed.total_interest)


def test_annual_rollups_chain_and_include_initial_deposit():
    result = calculate_savings(
        SavingsRequest(initial_deposit=5000, monthly_contribution=200, annual_rate_percent=4, years_to_grow=3)
    )

    assert len(result.schedule) == 36
    assert len(result.annual_schedule) == 3
    first = result.annual_schedule[0]
    assert first.starting_balance == 0
    assert isclose(first.deposits, 5000 + 200 * 12)
    for previous, current in zip(result.annual_schedule, result.annual_schedule[1:]):
        assert current.starting_balance == previous.ending_balance
    assert result.annual_schedule[-1].ending_balance == result.final_balance
    assert isclose(result.total_contributions, 200 * 36)


def test_contributions_earn_from_the_following_month():
    result = calculate_savings(SavingsRequest(monthly_contribution=100, annual_rate_percent=12, years_to_grow=1))

    assert result.schedule[0].interest == 0
    assert isclose(result.schedule[1].interest, 1.0)


def test_invalid_inputs():
    with pytest.raises(InputValidationError) as excinfo:
        calculate_savings(
            SavingsRequest(initial_deposit=-1, annual_rate_percent=-2, years_to_grow=0, tax_rate_percent=120)
        )

    assert len(excinfo.value.errors) == 4
