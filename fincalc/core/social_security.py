"""Social Security claiming-age analysis.

Benefits claimed before full retirement age (FRA) are reduced by 5/9 of 1%
per month for the first 36 months and 5/12 of 1% for every month beyond.
Claiming after FRA earns delayed credits of 2/3 of 1% per month, which stop
at age 70.

Lifetime values are annual benefit streams, grown by COLA and discounted by
the investment return, summed from the claim age up to life expectancy. The
ideal-age scan additionally discounts each candidate by the years waited
since 62 so that every age is compared in the same money.

Example
-------

>>> round(monthly_benefit(3000, 70, 67), 2)
3720.0
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List

from fincalc.config import BREAK_EVEN_HORIZON, CLAIM_AGE_RANGE, MAX_CREDIT_AGE, PLANNING_HORIZONS
from fincalc.domain.errors import raise_if_errors
from fincalc.domain.tables import FULL_RETIREMENT_AGE_BY_BIRTH_YEAR
from fincalc.schemas.social_security import (
    AgeAnalysis,
    ClaimOption,
    CompareAgesRequest,
    CompareAgesResponse,
    CumulativeComparison,
    IdealAgeRequest,
    IdealAgeResponse,
)

logger = logging.getLogger(__name__)

_EARLY_TIER_MONTHS = 36


def full_retirement_age(birth_year: int) -> float:
    if birth_year <= 1937:
        return 65.0
    if birth_year in FULL_RETIREMENT_AGE_BY_BIRTH_YEAR:
        return FULL_RETIREMENT_AGE_BY_BIRTH_YEAR[birth_year]
    if 1943 <= birth_year <= 1954:
        return 66.0
    return 67.0


def monthly_benefit(full_benefit: float, claim_age: float, fra: float) -> float:
    """Monthly benefit for claiming at ``claim_age`` given the FRA benefit."""
    months = (claim_age - fra) * 12
    if months < 0:
        early = -months
        if early <= _EARLY_TIER_MONTHS:
            reduction = early * (5 / 9) / 100
        else:
            reduction = (_EARLY_TIER_MONTHS * (5 / 9) + (early - _EARLY_TIER_MONTHS) * (5 / 12)) / 100
        return full_benefit * (1 - reduction)
    if months > 0:
        late = min(months, (MAX_CREDIT_AGE - fra) * 12)
        return full_benefit * (1 + late * (2 / 3) / 100)
    return full_benefit


def lifetime_value(
    monthly: float, claim_age: int, life_expectancy: int, cola_percent: float, return_percent: float
) -> float:
    years = life_expectancy - claim_age
    if years <= 0:
        return 0.0
    cola = cola_percent / 100
    growth = 1 + return_percent / 100
    return sum(monthly * 12 * (1 + cola) ** year / growth ** year for year in range(years))


def break_even_age(
    early_age: int, early_benefit: float, later_age: int, later_benefit: float, cola_percent: float
) -> float:
    """First age at which the later claim's cumulative total overtakes the earlier one.

    Returns ``math.inf`` when the later benefit is not larger (it can never
    catch up) and :data:`BREAK_EVEN_HORIZON` when it has not caught up by then.
    """
    if later_benefit <= early_benefit:
        return math.inf

    cola = cola_percent / 100
    early_total = 0.0
    later_total = 0.0
    for age in range(early_age, BREAK_EVEN_HORIZON + 1):
        early_years = max(0, age - early_age)
        later_years = max(0, age - later_age)
        if early_years > 0:
            early_total += early_benefit * (1 + cola) ** (early_years - 1) * 12
        if later_years > 0:
            later_total += later_benefit * (1 + cola) ** (later_years - 1) * 12
            if later_total > early_total:
                return float(age)
    return float(BREAK_EVEN_HORIZON)


def _json_age(age: float):
    return None if math.isinf(age) else age


def _validate_ideal(request: IdealAgeRequest) -> None:
    errors: List[str] = []
    if not 1940 <= request.birth_year <= 2010:
        errors.append("Birth year must be between 1940 and 2010")
    if not 65 <= request.life_expectancy <= 110:
        errors.append("Life expectancy must be between 65 and 110")
    if not 0 <= request.investment_return <= 15:
        errors.append("Investment return must be between 0% and 15%")
    if not 0 <= request.cola <= 10:
        errors.append("COLA must be between 0% and 10%")
    if request.full_benefit <= 0:
        errors.append("Full benefit must be greater than 0")
    raise_if_errors(errors)


def _validate_compare(request: CompareAgesRequest) -> None:
    low, high = CLAIM_AGE_RANGE
    errors: List[str] = []
    for label, age in (("First", request.claim_age_1), ("Second", request.claim_age_2)):
        if not low <= age <= high:
            errors.append(f"{label} claim age must be between {low} and {high}")
    for label, payment in (("First", request.monthly_payment_1), ("Second", request.monthly_payment_2)):
        if payment <= 0:
            errors.append(f"{label} monthly payment must be greater than 0")
    if not 0 <= request.investment_return <= 15:
        errors.append("Investment return must be between 0% and 15%")
    if not 0 <= request.cola <= 10:
        errors.append("COLA must be between 0% and 10%")
    raise_if_errors(errors)


def _ideal_recommendation(age: int, life_expectancy: int, investment_return: float) -> str:
    if age <= 64:
        return (
            f"With a life expectancy of {life_expectancy} and a {investment_return}% return, "
            f"claiming early at {age} maximizes lifetime value."
        )
    if age >= 68:
        return (
            f"With a life expectancy of {life_expectancy} and a {investment_return}% return, "
            f"delaying until {age} is optimal."
        )
    return f"Claiming at {age} balances the monthly benefit against total lifetime value."


def ideal_claim_age(request: IdealAgeRequest) -> IdealAgeResponse:
    """Scan every claim age in range and pick the one with the highest present value."""
    _validate_ideal(request)

    fra = full_retirement_age(request.birth_year)
    first_age, last_age = CLAIM_AGE_RANGE
    growth = 1 + request.investment_return / 100

    rows: List[AgeAnalysis] = []
    benefits: Dict[int, float] = {}
    best_age = first_age
    best_value = 0.0
    for age in range(first_age, last_age + 1):
        monthly = monthly_benefit(request.full_benefit, age, fra)
        value = lifetime_value(monthly, age, request.life_expectancy, request.cola, request.investment_return)
        present = value / growth ** (age - first_age)
        benefits[age] = monthly
        rows.append(
            AgeAnalysis(
                age=age,
                monthly_benefit=round(monthly, 2),
                annual_benefit=round(monthly * 12, 2),
                lifetime_value=round(value, 2),
                present_value=round(present, 2),
                percent_of_fra=monthly / request.full_benefit * 100,
            )
        )
        if present > best_value:
            best_value = present
            best_age = age

    best = rows[best_age - first_age]
    vs_early = break_even_age(first_age, benefits[first_age], best_age, benefits[best_age], request.cola)
    vs_late = break_even_age(best_age, benefits[best_age], last_age, benefits[last_age], request.cola)
    logger.debug("ideal claim age %d (fra %.3f)", best_age, fra)

    return IdealAgeResponse(
        full_retirement_age=fra,
        ideal_claim_age=best_age,
        monthly_benefit_at_ideal_age=best.monthly_benefit,
        annual_benefit_at_ideal_age=best.annual_benefit,
        lifetime_value_at_ideal_age=best.lifetime_value,
        present_value_at_ideal_age=best.present_value,
        age_analysis=rows,
        break_even_vs_early=_json_age(vs_early),
        break_even_vs_late=_json_age(vs_late),
        recommendation=_ideal_recommendation(best_age, request.life_expectancy, request.investment_return),
    )


def claim_option(claim_age: int, monthly: float, cola_percent: float, return_percent: float) -> ClaimOption:
    discount = (1 + return_percent / 100) ** (claim_age - CLAIM_AGE_RANGE[0])
    lifetime = {
        horizon: lifetime_value(monthly, claim_age, horizon, cola_percent, return_percent)
        for horizon in PLANNING_HORIZONS
    }
    return ClaimOption(
        claim_age=claim_age,
        monthly_benefit=monthly,
        annual_benefit=monthly * 12,
        lifetime_values={horizon: round(value, 2) for horizon, value in lifetime.items()},
        present_values={horizon: round(value / discount, 2) for horizon, value in lifetime.items()},
    )


def cumulative_comparison(
    claim_age_1: int, monthly_1: float, claim_age_2: int, monthly_2: float, cola_percent: float
) -> List[CumulativeComparison]:
    """Nominal benefits received by each option through every age up to the last horizon."""
    cola = cola_percent / 100
    start = min(claim_age_1, claim_age_2)
    totals = [0.0, 0.0]
    rows: List[CumulativeComparison] = []
    for age in range(start, max(PLANNING_HORIZONS) + 1):
        for index, (claim_age, monthly) in enumerate(((claim_age_1, monthly_1), (claim_age_2, monthly_2))):
            if age >= claim_age:
                totals[index] += monthly * 12 * (1 + cola) ** (age - claim_age)
        rows.append(
            CumulativeComparison(
                age=age,
                years_from_start=age - start,
                option_1_cumulative=round(totals[0], 2),
                option_2_cumulative=round(totals[1], 2),
                difference=round(totals[0] - totals[1], 2),
            )
        )
    return rows


def compare_claim_ages(request: CompareAgesRequest) -> CompareAgesResponse:
    _validate_compare(request)

    option_1 = claim_option(request.claim_age_1, request.monthly_payment_1, request.cola, request.investment_return)
    option_2 = claim_option(request.claim_age_2, request.monthly_payment_2, request.cola, request.investment_return)

    early, later = sorted((option_1, option_2), key=lambda option: option.claim_age)
    break_even = break_even_age(
        early.claim_age, early.monthly_benefit, later.claim_age, later.monthly_benefit, request.cola
    )

    planning_age = PLANNING_HORIZONS[0]
    better = 1 if option_1.present_values[planning_age] > option_2.present_values[planning_age] else 2
    differences = {
        horizon: round(option_1.present_values[horizon] - option_2.present_values[horizon], 2)
        for horizon in PLANNING_HORIZONS
    }

    chosen = option_1 if better == 1 else option_2
    if math.isinf(break_even):
        recommendation = (
            f"Option {better} (claiming at {chosen.claim_age}) is always ahead: "
            "the later claim never pays more per month."
        )
    else:
        recommendation = (
            f"Option {better} (claiming at {chosen.claim_age}) has the higher present value at "
            f"age {planning_age}; the later claim catches up at age {break_even:.0f}."
        )

    return CompareAgesResponse(
        option_1=option_1,
        option_2=option_2,
        break_even_age=_json_age(break_even),
        better_option=better,
        differences=differences,
        cumulative_comparison=cumulative_comparison(
            request.claim_age_1,
            request.monthly_payment_1,
            request.claim_age_2,
            request.monthly_payment_2,
            request.cola,
        ),
        recommendation=recommendation,
    )


__all__ = [
    "full_retirement_age",
    "monthly_benefit",
    "lifetime_value",
    "break_even_age",
    "ideal_claim_age",
    "claim_option",
    "cumulative_comparison",
    "compare_claim_ages",
]
