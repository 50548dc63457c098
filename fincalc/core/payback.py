"""Payback period, discounted payback, ROI and NPV for a series of inflows.

The payback period is the (fractional) period in which the running total of
inflows first covers the initial investment. Within the crossing period the
inflow is assumed to arrive evenly, so the result is

    (period - 1) + remaining_deficit / inflow_of_that_period

The discounted variant does the same with each inflow first discounted to
``amount / (1 + rate)^period``. When the running total never reaches the
investment the result is ``None`` rather than an extrapolation.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from fincalc.domain.errors import UnsupportedOptionError, raise_if_errors
from fincalc.schemas.payback import CashFlow, CashFlowRow, PaybackRequest, PaybackResponse, PeriodType

logger = logging.getLogger(__name__)


def discount(amount: float, rate_percent: float, period: int) -> float:
    return amount / (1 + rate_percent / 100) ** period


def _crossing_period(flows: Sequence[CashFlow], values: Iterable[float], initial_investment: float) -> Optional[float]:
    cumulative = 0.0
    for flow, value in zip(flows, values):
        previous = cumulative
        cumulative += value
        if cumulative >= initial_investment:
            return flow.period - 1 + (initial_investment - previous) / value
    return None


def simple_payback(cash_flows: Sequence[CashFlow], initial_investment: float) -> Optional[float]:
    return _crossing_period(cash_flows, (flow.amount for flow in cash_flows), initial_investment)


def discounted_payback(
    cash_flows: Sequence[CashFlow], initial_investment: float, discount_rate: float
) -> Optional[float]:
    values = (discount(flow.amount, discount_rate, flow.period) for flow in cash_flows)
    return _crossing_period(cash_flows, values, initial_investment)


def cumulative_cash_flows(
    cash_flows: Sequence[CashFlow], initial_investment: float, discount_rate: float
) -> List[CashFlowRow]:
    rows: List[CashFlowRow] = []
    cumulative = 0.0
    discounted_cumulative = 0.0
    for flow in cash_flows:
        present = discount(flow.amount, discount_rate, flow.period)
        cumulative += flow.amount
        discounted_cumulative += present
        rows.append(
            CashFlowRow(
                period=flow.period,
                amount=flow.amount,
                label=flow.label,
                cumulative_cash_flow=cumulative - initial_investment,
                discounted_value=present,
                discounted_cumulative_cash_flow=discounted_cumulative - initial_investment,
            )
        )
    return rows


def return_on_investment(initial_investment: float, total_returns: float) -> float:
    return (total_returns / initial_investment - 1) * 100


def net_present_value(cash_flows: Sequence[CashFlow], initial_investment: float, discount_rate: float) -> float:
    return -initial_investment + sum(discount(flow.amount, discount_rate, flow.period) for flow in cash_flows)


def split_period(periods: float, period_type: PeriodType) -> Tuple[int, int]:
    """Express a fractional period count as whole ``(years, months)``."""
    try:
        period_type = PeriodType(period_type)
    except ValueError:
        raise UnsupportedOptionError(f"Unknown period type: {period_type}") from None

    if period_type is PeriodType.MONTHLY:
        years = math.floor(periods / 12)
        months = round(periods - years * 12)
    else:
        years = math.floor(periods)
        months = round((periods - years) * 12)
    if months == 12:
        years, months = years + 1, 0
    return years, months


def _validate(request: PaybackRequest) -> None:
    errors: List[str] = []
    if request.initial_investment <= 0:
        errors.append("Initial investment must be greater than zero")
    if not request.cash_flows:
        errors.append("At least one cash flow period is required")
    else:
        if any(flow.amount < 0 for flow in request.cash_flows):
            errors.append("All cash flows must be greater than or equal to zero")
        periods = [flow.period for flow in request.cash_flows]
        if len(periods) != len(set(periods)):
            errors.append("Each period must be unique")
        if any(period < 1 for period in periods):
            errors.append("All periods must be positive integers starting from 1")
    if not 0 <= request.discount_rate <= 100:
        errors.append("Discount rate must be between 0 and 100")
    raise_if_errors(errors)


def calculate_payback(request: PaybackRequest) -> PaybackResponse:
    _validate(request)

    flows = sorted(request.cash_flows, key=lambda flow: flow.period)
    investment = request.initial_investment
    rate = request.discount_rate

    simple = simple_payback(flows, investment)
    discounted = discounted_payback(flows, investment, rate)
    simple_years, simple_months = split_period(simple, request.period_type) if simple is not None else (None, None)
    discounted_years, discounted_months = (
        split_period(discounted, request.period_type) if discounted is not None else (None, None)
    )

    total_inflows = sum(flow.amount for flow in flows)
    logger.debug("payback: simple=%s discounted=%s over %d flows", simple, discounted, len(flows))

    return PaybackResponse(
        simple_payback_period=simple,
        simple_payback_years=simple_years,
        simple_payback_months=simple_months,
        pays_back=simple is not None,
        discounted_payback_period=discounted,
        discounted_payback_years=discounted_years,
        discounted_payback_months=discounted_months,
        discounted_pays_back=discounted is not None,
        total_cash_inflows=total_inflows,
        profit_after_payback=total_inflows - investment,
        roi=return_on_investment(investment, total_inflows),
        npv=net_present_value(flows, investment, rate),
        cash_flow_schedule=cumulative_cash_flows(flows, investment, rate),
        period_type=request.period_type,
        discount_rate=rate,
        initial_investment=investment,
    )


__all__ = [
    "discount",
    "simple_payback",
    "discounted_payback",
    "cumulative_cash_flows",
    "return_on_investment",
    "net_present_value",
    "split_period",
    "calculate_payback",
]
