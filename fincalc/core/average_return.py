"""Average investment return over periods of possibly different lengths.

All results are percentages. The geometric mean treats every period as one
step regardless of its length; the annualized return instead spreads the
compounded growth over the total elapsed time in years.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from fincalc.domain.errors import raise_if_errors
from fincalc.schemas.returns import AverageReturnRequest, AverageReturnResponse, ReturnPeriod

logger = logging.getLogger(__name__)


def _growth(periods: Sequence[ReturnPeriod]) -> float:
    return math.prod(1 + period.return_percent / 100 for period in periods)


def total_years(periods: Sequence[ReturnPeriod]) -> float:
    return sum(period.length_in_years for period in periods)


def arithmetic_mean(periods: Sequence[ReturnPeriod]) -> float:
    if not periods:
        return 0.0
    return sum(period.return_percent for period in periods) / len(periods)


def geometric_mean(periods: Sequence[ReturnPeriod]) -> float:
    if not periods:
        return 0.0
    if len(periods) == 1:
        return periods[0].return_percent
    return (_growth(periods) ** (1 / len(periods)) - 1) * 100


def annualized_return(periods: Sequence[ReturnPeriod]) -> float:
    years = total_years(periods)
    if not periods or years == 0:
        return 0.0
    return (_growth(periods) ** (1 / years) - 1) * 100


def cumulative_return(periods: Sequence[ReturnPeriod]) -> float:
    if not periods:
        return 0.0
    return (_growth(periods) - 1) * 100


def _validate(periods: Sequence[ReturnPeriod]) -> None:
    errors: List[str] = []
    for index, period in enumerate(periods, start=1):
        if period.return_percent <= -100:
            errors.append(f"Period {index}: return must be greater than -100%")
        if period.years < 0 or not 0 <= period.months <= 11:
            errors.append(f"Period {index}: years must be non-negative and months between 0 and 11")
    raise_if_errors(errors)


def calculate_average_return(request: AverageReturnRequest) -> AverageReturnResponse:
    periods = request.periods
    _validate(periods)
    logger.debug("average return over %d periods", len(periods))
    return AverageReturnResponse(
        arithmetic_mean=arithmetic_mean(periods),
        geometric_mean=geometric_mean(periods),
        annualized_return=annualized_return(periods),
        cumulative_return=cumulative_return(periods),
        total_periods=len(periods),
        total_years=round(total_years(periods), 2),
    )


__all__ = [
    "total_years",
    "arithmetic_mean",
    "geometric_mean",
    "annualized_return",
    "cumulative_return",
    "calculate_average_return",
]
