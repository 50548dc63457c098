from __future__ import annotations

import math
from math import isclose

import pytest

from fincalc.config import BREAK_EVEN_HORIZON
from fincalc.core.social_security import (
    break_even_age,
    compare_claim_ages,
    full_retirement_age,
    ideal_claim_age,
    lifetime_value,
    monthly_benefit,
)
from fincalc.domain.errors import InputValidationError
from fincalc.schemas.social_security import CompareAgesRequest, IdealAgeRequest


@pytest.mark.parametrize(
    "birth_year, expected",
    [(1930, 65.0), (1937, 65.0), (1940, 65.5), (1950, 66.0), (1957, 66.5), (1960, 67.0), (1995, 67.0)],
)
def test_full_retirement_age_schedule(birth_year, expected):
    assert full_retirement_age(birth_year) == expected


def test_early_claim_reductions():
    # 60 months early: 36 at 5/9% plus 24 at 5/12%
    assert isclose(monthly_benefit(3000, 62, 67), 2100, abs_tol=0.01)
    # 48 months early: 36 at 5/9% plus 12 at 5/12%
    assert isclose(monthly_benefit(2500, 62, 66), 1875, abs_tol=0.01)
    assert monthly_benefit(3000, 67, 67) == 3000


def test_delayed_credits_stop_at_seventy():
    assert isclose(monthly_benefit(3000, 70, 67), 3720, abs_tol=0.01)
    assert monthly_benefit(3000, 72, 67) == monthly_benefit(3000, 70, 67)


def test_lifetime_value_discounts_cola_adjusted_benefits():
    value = lifetime_value(2000, 62, 85, 2, 5)

    assert 400000 < value < 600000
    assert lifetime_value(2000, 67, 85, 0, 0) == 2000 * 12 * 18
    assert lifetime_value(2000, 85, 85, 2, 5) == 0


def test_break_even_age():
    assert break_even_age(62, 1750, 67, 2500, 0) == 79
    assert math.isinf(break_even_age(62, 2000, 67, 2000, 2))
    assert break_even_age(62, 1000, 70, 1001, 0) == BREAK_EVEN_HORIZON


def test_ideal_age_prefers_waiting_with_no_discounting():
    result = ideal_claim_age(IdealAgeRequest(birth_year=1960, life_expectancy=100, investment_return=0, cola=0))

    assert result.full_retirement_age == 67
    assert result.ideal_claim_age == 70
    assert [row.age for row in result.age_analysis] == list(range(62, 71))
    assert isclose(result.age_analysis[5].percent_of_fra, 100)
    assert result.break_even_vs_early is not None
    # already at the latest age, so waiting longer has nothing to catch up
    assert result.break_even_vs_late is None


def test_ideal_age_prefers_claiming_early_with_high_returns():
    result = ideal_claim_age(IdealAgeRequest(birth_year=1960, life_expectancy=75, investment_return=15, cola=0))

    assert result.ideal_claim_age == 62
    assert result.break_even_vs_early is None
    assert result.break_even_vs_late is not None
    assert "early" in result.recommendation


def test_ideal_age_validation():
    with pytest.raises(InputValidationError) as excinfo:
        ideal_claim_age(IdealAgeRequest(birth_year=1900, life_expectancy=120, investment_return=-5, cola=15))

    assert "Birth year must be between 1940 and 2010" in excinfo.value.errors
    assert len(excinfo.value.errors) == 4


def test_compare_two_ages():
    result = compare_claim_ages(
        CompareAgesRequest(
            claim_age_1=62,
            monthly_payment_1=2000,
            claim_age_2=67,
            monthly_payment_2=3000,
            investment_return=6,
            cola=2.5,
        )
    )

    assert set(result.option_1.lifetime_values) == {85, 90, 95}
    assert result.option_1.annual_benefit == 24000
    assert result.break_even_age is not None
    assert 67 < result.break_even_age < 100
    assert result.differences[85] == pytest.approx(
        result.option_1.present_values[85] - result.option_2.present_values[85], abs=0.01
    )

    rows = result.cumulative_comparison
    assert [row.age for row in rows] == list(range(62, 96))
    assert rows[0].option_1_cumulative == 24000
    assert rows[0].option_2_cumulative == 0
    assert rows[0].years_from_start == 0
    assert rows[-1].difference == pytest.approx(rows[-1].option_1_cumulative - rows[-1].option_2_cumulative, abs=0.01)


def test_compare_break_even_ignores_option_order():
    forward = compare_claim_ages(
        CompareAgesRequest(
            claim_age_1=62, monthly_payment_1=1800, claim_age_2=70, monthly_payment_2=3100, investment_return=3, cola=2
        )
    )
    reverse = compare_claim_ages(
        CompareAgesRequest(
            claim_age_1=70, monthly_payment_1=3100, claim_age_2=62, monthly_payment_2=1800, investment_return=3, cola=2
        )
    )

    assert forward.break_even_age == reverse.break_even_age
    assert forward.better_option != reverse.better_option


def test_compare_without_break_even():
    result = compare_claim_ages(
        CompareAgesRequest(
            claim_age_1=62, monthly_payment_1=2500, claim_age_2=67, monthly_payment_2=2000, investment_return=4, cola=2
        )
    )

    assert result.break_even_age is None
    assert result.better_option == 1


def test_compare_validation():
    with pytest.raises(InputValidationError) as excinfo:
        compare_claim_ages(
            CompareAgesRequest(
                claim_age_1=60,
                monthly_payment_1=-100,
                claim_age_2=75,
                monthly_payment_2=0,
                investment_return=20,
                cola=-1,
            )
        )

    assert "First claim age must be between 62 and 70" in excinfo.value.errors
    assert len(excinfo.value.errors) == 6
