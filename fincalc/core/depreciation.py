"""Depreciation schedules for the four supported methods.

Every method follows the same yearly recurrence: work out this year's charge,
add it to the accumulated total and derive the book value. They differ only
in how the charge is computed:

* straight-line: ``(cost - salvage) / life`` every year.
* declining-balance: ``book_value / life``.
* double-declining-balance: ``book_value * 2 / life``.
* sum-of-years-digits: ``(cost - salvage) * remaining_life / (life * (life + 1) / 2)``.

The declining methods never take the book value below salvage; the year that
would cross it is cut short instead.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Union

from fincalc.domain.errors import UnsupportedOptionError, raise_if_errors
from fincalc.schemas.depreciation import (
    DepreciationMethod,
    DepreciationRequest,
    DepreciationResponse,
    YearlyDepreciation,
)

logger = logging.getLogger(__name__)


def _schedule(
    asset_cost: float,
    salvage_value: float,
    useful_life: int,
    charge: Callable[[int, float], float],
) -> List[YearlyDepreciation]:
    """Run the shared recurrence; ``charge(year, book_value)`` gives the year's depreciation."""
    rows: List[YearlyDepreciation] = []
    accumulated = 0.0
    for year in range(1, useful_life + 1):
        book_value = asset_cost - accumulated
        annual = charge(year, book_value)
        if book_value - annual < salvage_value:
            annual = book_value - salvage_value
        accumulated += annual
        rows.append(
            YearlyDepreciation(
                year=year,
                annual_depreciation=annual,
                accumulated_depreciation=accumulated,
                book_value=asset_cost - accumulated,
            )
        )
    return rows


def straight_line(asset_cost: float, salvage_value: float, useful_life: int) -> List[YearlyDepreciation]:
    annual = (asset_cost - salvage_value) / useful_life
    return _schedule(asset_cost, salvage_value, useful_life, lambda year, book: annual)


def declining_balance(
    asset_cost: float, salvage_value: float, useful_life: int, factor: float = 1.0
) -> List[YearlyDepreciation]:
    rate = factor / useful_life
    return _schedule(asset_cost, salvage_value, useful_life, lambda year, book: book * rate)


def double_declining_balance(asset_cost: float, salvage_value: float, useful_life: int) -> List[YearlyDepreciation]:
    return declining_balance(asset_cost, salvage_value, useful_life, factor=2.0)


def sum_of_years_digits(asset_cost: float, salvage_value: float, useful_life: int) -> List[YearlyDepreciation]:
    base = asset_cost - salvage_value
    sum_of_years = useful_life * (useful_life + 1) / 2
    return _schedule(
        asset_cost,
        salvage_value,
        useful_life,
        lambda year, book: base * (useful_life - year + 1) / sum_of_years,
    )


_METHODS: Dict[DepreciationMethod, Callable[[float, float, int], List[YearlyDepreciation]]] = {
    DepreciationMethod.STRAIGHT_LINE: straight_line,
    DepreciationMethod.DECLINING_BALANCE: declining_balance,
    DepreciationMethod.DOUBLE_DECLINING_BALANCE: double_declining_balance,
    DepreciationMethod.SUM_OF_YEARS_DIGITS: sum_of_years_digits,
}


def resolve_method(method: Union[str, DepreciationMethod]) -> DepreciationMethod:
    try:
        return DepreciationMethod(method)
    except ValueError:
        raise UnsupportedOptionError(f"Invalid depreciation method: {method}") from None


def depreciation_schedule(
    asset_cost: float,
    salvage_value: float,
    useful_life: int,
    method: Union[str, DepreciationMethod],
) -> List[YearlyDepreciation]:
    """Validate the inputs and return the yearly schedule for ``method``."""
    resolved = resolve_method(method)

    errors: List[str] = []
    if asset_cost <= 0:
        errors.append("Asset cost must be greater than 0")
    if salvage_value < 0:
        errors.append("Salvage value cannot be negative")
    elif asset_cost > 0 and salvage_value >= asset_cost:
        errors.append("Salvage value must be less than asset cost")
    if useful_life <= 0:
        errors.append("Useful life must be greater than 0")
    raise_if_errors(errors)

    return _METHODS[resolved](asset_cost, salvage_value, useful_life)


def calculate_depreciation(request: DepreciationRequest) -> DepreciationResponse:
    schedule = depreciation_schedule(
        request.asset_cost,
        request.salvage_value,
        request.useful_life_years,
        request.method,
    )
    logger.debug("%s depreciation over %d years", request.method.value, len(schedule))
    return DepreciationResponse(
        method=request.method,
        asset_cost=request.asset_cost,
        salvage_value=request.salvage_value,
        useful_life_years=request.useful_life_years,
        depreciable_base=request.asset_cost - request.salvage_value,
        total_depreciation=schedule[-1].accumulated_depreciation,
        schedule=schedule,
    )


__all__ = [
    "straight_line",
    "declining_balance",
    "double_declining_balance",
    "sum_of_years_digits",
    "depreciation_schedule",
    "calculate_depreciation",
]
