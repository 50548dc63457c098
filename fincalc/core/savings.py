"""Compound-growth savings projection with contributions and tax on interest.

The simulation always steps month by month. Compounding that is less (or
more) frequent than monthly is folded into an equivalent monthly rate so the
twelve-steps-per-year loop stays the same for every frequency.

Order of operations within a month:
  1) month 1 only: deposit the initial amount.
  2) compute gross interest on the balance so far.
  3) withhold ``tax_rate_percent`` of it and credit the rest.
  4) add the monthly contribution, escalated once per elapsed year.
  5) in December (month % 12 == 0) add the annual contribution, same escalation.

Contributions therefore start earning interest the month after they arrive.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Union

from fincalc.domain.errors import UnsupportedOptionError, raise_if_errors
from fincalc.schemas.savings import (
    AnnualSavingsRow,
    CompoundFrequency,
    MonthlySavingsRow,
    SavingsRequest,
    SavingsResponse,
)

logger = logging.getLogger(__name__)

PERIODS_PER_YEAR: Dict[CompoundFrequency, float] = {
    CompoundFrequency.DAILY: 365,
    CompoundFrequency.WEEKLY: 52,
    CompoundFrequency.BIWEEKLY: 26,
    CompoundFrequency.SEMIMONTHLY: 24,
    CompoundFrequency.MONTHLY: 12,
    CompoundFrequency.QUARTERLY: 4,
    CompoundFrequency.SEMIANNUALLY: 2,
    CompoundFrequency.ANNUALLY: 1,
    CompoundFrequency.CONTINUOUS: math.inf,
}


def effective_monthly_rate(annual_rate_percent: float, frequency: Union[str, CompoundFrequency]) -> float:
    """Monthly growth factor minus one for a nominal rate compounded at ``frequency``."""
    try:
        frequency = CompoundFrequency(frequency)
    except ValueError:
        raise UnsupportedOptionError(f"Unknown compounding frequency: {frequency}") from None

    if annual_rate_percent == 0:
        return 0.0
    rate = annual_rate_percent / 100

    if frequency is CompoundFrequency.CONTINUOUS:
        return math.exp(rate / 12) - 1

    n = PERIODS_PER_YEAR[frequency]
    if n >= 12:
        return (1 + rate / n) ** (n / 12) - 1
    months_per_period = 12 / n
    return (1 + rate / n) ** (1 / months_per_period) - 1


def _validate(request: SavingsRequest) -> None:
    errors: List[str] = []
    if request.initial_deposit < 0:
        errors.append("Initial deposit cannot be negative")
    if request.monthly_contribution < 0:
        errors.append("Monthly contribution cannot be negative")
    if request.annual_contribution < 0:
        errors.append("Annual contribution cannot be negative")
    if request.annual_rate_percent < 0:
        errors.append("Interest rate cannot be negative")
    if request.years_to_grow <= 0:
        errors.append("Years to grow must be at least 1")
    if not 0 <= request.tax_rate_percent <= 100:
        errors.append("Tax rate must be between 0 and 100")
    raise_if_errors(errors)


def calculate_savings(request: SavingsRequest) -> SavingsResponse:
    _validate(request)

    monthly_rate = effective_monthly_rate(request.annual_rate_percent, request.compound_frequency)
    tax_share = request.tax_rate_percent / 100
    escalation = 1 + request.contribution_increase_rate_percent / 100
    total_months = request.years_to_grow * 12

    balance = 0.0
    total_contributions = 0.0
    total_interest = 0.0
    total_tax = 0.0

    year_start_balance = 0.0
    year_deposits = 0.0
    year_interest = 0.0
    year_tax = 0.0

    schedule: List[MonthlySavingsRow] = []
    annual_schedule: List[AnnualSavingsRow] = []

    for month in range(1, total_months + 1):
        multiplier = escalation ** ((month - 1) // 12)
        deposit = 0.0

        # 1) initial deposit
        if month == 1:
            deposit += request.initial_deposit
            balance += request.initial_deposit
            year_deposits += request.initial_deposit

        # 2) + 3) interest on the existing balance, net of tax
        gross_interest = balance * monthly_rate
        tax = gross_interest * tax_share
        net_interest = gross_interest - tax
        balance += net_interest
        total_interest += net_interest
        total_tax += tax
        year_interest += net_interest
        year_tax += tax

        # 4) monthly contribution
        if request.monthly_contribution > 0:
            amount = request.monthly_contribution * multiplier
            deposit += amount
            balance += amount
            total_contributions += amount
            year_deposits += amount

        # 5) annual contribution in December
        if month % 12 == 0 and request.annual_contribution > 0:
            amount = request.annual_contribution * multiplier
            deposit += amount
            balance += amount
            total_contributions += amount
            year_deposits += amount

        schedule.append(
            MonthlySavingsRow(
                month=month,
                deposit=deposit,
                interest=net_interest,
                tax_paid=tax,
                ending_balance=balance,
            )
        )

        if month % 12 == 0:
            annual_schedule.append(
                AnnualSavingsRow(
                    year=month // 12,
                    starting_balance=year_start_balance,
                    deposits=year_deposits,
                    interest=year_interest,
                    tax_paid=year_tax,
                    ending_balance=balance,
                )
            )
            year_start_balance = balance
            year_deposits = year_interest = year_tax = 0.0

    logger.debug("savings projection: %d months, final balance %.2f", total_months, balance)

    return SavingsResponse(
        final_balance=balance,
        initial_deposit=request.initial_deposit,
        total_contributions=total_contributions,
        total_interest=total_interest,
        total_tax_paid=total_tax,
        schedule=schedule,
        annual_schedule=annual_schedule,
    )


__all__ = ["PERIODS_PER_YEAR", "effective_monthly_rate", "calculate_savings"]
