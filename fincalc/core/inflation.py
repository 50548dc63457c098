"""Inflation adjustments between today's money and future money."""

from __future__ import annotations

from typing import Dict, List

from fincalc.domain.errors import raise_if_errors
from fincalc.domain.tables import HISTORICAL_INFLATION_RATES
from fincalc.schemas.inflation import InflationRequest, InflationResponse, InflationYear


def real_value(present_value: float, inflation_rate: float, years: float) -> float:
    """Future amount with the same purchasing power: ``pv * (1 + rate/100)^years``."""
    return present_value * (1 + inflation_rate / 100) ** years


def purchasing_power(present_value: float, inflation_rate: float, years: float) -> float:
    """What ``present_value`` will buy after ``years`` of inflation, in today's money."""
    if inflation_rate == 0 or years == 0:
        return present_value
    return present_value / (1 + inflation_rate / 100) ** years


def implied_inflation_rate(present_value: float, future_value: float, years: float) -> float:
    """Annual rate (percent) that turns ``present_value`` into ``future_value``."""
    if years == 0 or present_value == 0 or present_value == future_value:
        return 0.0
    return ((future_value / present_value) ** (1 / years) - 1) * 100


def average_inflation_by_decade() -> Dict[str, float]:
    return dict(HISTORICAL_INFLATION_RATES)


def calculate_inflation(request: InflationRequest) -> InflationResponse:
    errors: List[str] = []
    if request.initial_amount <= 0:
        errors.append("Initial amount must be greater than 0")
    if request.inflation_rate < 0:
        errors.append("Inflation rate cannot be negative")
    if request.inflation_rate > 100:
        errors.append("Inflation rate must be 100% or less")
    if request.years < 0:
        errors.append("Number of years must be at least 0")
    if request.years > 100:
        errors.append("Number of years cannot exceed 100")
    raise_if_errors(errors)

    amount = request.initial_amount
    rate = request.inflation_rate
    future_value = real_value(amount, rate, request.years)
    power = purchasing_power(amount, rate, request.years)

    # each year is computed from scratch so rows do not depend on their neighbours
    year_by_year: List[InflationYear] = []
    for year in range(1, request.years + 1):
        value_today = purchasing_power(amount, rate, year)
        year_by_year.append(
            InflationYear(
                year=year,
                nominal_value=amount,
                real_value=value_today,
                inflation_impact=amount - value_today,
                cumulative_inflation=(real_value(amount, rate, year) / amount - 1) * 100,
            )
        )

    return InflationResponse(
        future_value=future_value,
        purchasing_power=power,
        total_inflation=0.0 if request.years == 0 else (future_value / amount - 1) * 100,
        real_value_loss=amount - power,
        year_by_year=year_by_year,
    )


__all__ = [
    "real_value",
    "purchasing_power",
    "implied_inflation_rate",
    "average_inflation_by_decade",
    "calculate_inflation",
]
