"""Required Minimum Distribution (RMD) calculator.

RMDs are the IRS-mandated yearly withdrawals from tax-deferred retirement
accounts. The amount is the prior year-end balance divided by a distribution
period looked up by age:

* the Uniform Lifetime Table for most owners;
* the Joint Life and Last Survivor Table when the sole beneficiary is a spouse
  more than ten years younger, which always gives a longer period.

Start age follows the simplified post-SECURE-Act rule: 72 for owners born in
1950 or earlier, 73 for everyone else.

Example
-------

>>> round(compute_rmd(500000, 75), 2)
20325.2
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Tuple

from fincalc.config import JOINT_TABLE_AGE_GAP, RMD_MAX_AGE
from fincalc.domain.errors import InputValidationError, raise_if_errors
from fincalc.domain.tables import JOINT_LIFE_TABLE, UNIFORM_LIFETIME_TABLE, single_life_expectancy
from fincalc.schemas.rmd import RMDProjectionRow, RMDRequest, RMDResponse, TableName

logger = logging.getLogger(__name__)

_FIRST_TABLE_AGE = min(UNIFORM_LIFETIME_TABLE)


def rmd_start_age(birth_year: int) -> int:
    """Age at which distributions must begin."""
    if birth_year <= 1950:
        return 72
    return 73


def first_rmd_year(birth_year: int) -> int:
    return birth_year + rmd_start_age(birth_year)


def is_rmd_required(birth_year: int, year: int) -> bool:
    return year - birth_year >= rmd_start_age(birth_year)


def rmd_deadline(birth_year: int, rmd_year: int) -> date:
    """Last day to take the distribution for ``rmd_year``.

    The first RMD may be delayed until April 1 of the following year; every
    later one is due by December 31 of its own year.
    """
    if rmd_year == first_rmd_year(birth_year):
        return date(rmd_year + 1, 4, 1)
    return date(rmd_year, 12, 31)


def uniform_period(age: int) -> float:
    if age < _FIRST_TABLE_AGE:
        raise InputValidationError(f"No distribution period is defined below age {_FIRST_TABLE_AGE}")
    return UNIFORM_LIFETIME_TABLE[min(age, RMD_MAX_AGE)]


def _joint_lookup(age: int, spouse_age: int) -> float:
    joint = JOINT_LIFE_TABLE.get((age, spouse_age))
    if joint is None:
        # last-survivor expectancy is at least the younger spouse's own
        joint = single_life_expectancy(spouse_age)
    return joint


def joint_period(age: int, spouse_age: int) -> float:
    """Joint-table period for a couple, never longer than at any earlier age.

    The joint table only lists sample pairs and the single-life fallback moves
    in five-year steps, so a raw lookup can rise from one year to the next.
    Taking the lowest value seen along the couple's own path (same age gap)
    since the first table age keeps the period non-increasing.
    """
    gap = age - spouse_age
    start = min(_FIRST_TABLE_AGE, age)
    return min(_joint_lookup(owner, owner - gap) for owner in range(start, age + 1))


def distribution_period(
    age: int, has_spouse_beneficiary: bool = False, spouse_age: Optional[int] = None
) -> Tuple[float, TableName]:
    """Return ``(period, table)`` for an owner of ``age``."""
    period = uniform_period(age)
    if has_spouse_beneficiary and spouse_age is not None and age - spouse_age > JOINT_TABLE_AGE_GAP:
        return max(joint_period(age, spouse_age), period), "Joint"
    return period, "Uniform"


def compute_rmd(balance: float, age: int, has_spouse_beneficiary: bool = False, spouse_age: Optional[int] = None) -> float:
    if balance <= 0:
        return 0.0
    period, _ = distribution_period(age, has_spouse_beneficiary, spouse_age)
    return balance / period


def project_rmds(
    balance: float,
    start_age: int,
    start_year: int,
    years: int,
    annual_return_percent: float,
    required_from_age: int,
    has_spouse_beneficiary: bool = False,
    spouse_age: Optional[int] = None,
) -> List[RMDProjectionRow]:
    """Year-by-year balance path: withdraw the RMD, then grow what is left.

    Each year's RMD is recomputed from that year's age and balance, so the
    balance carried forward depends on the withdrawal just taken. The
    projection stops at age 120 or once the account is empty.
    """
    rows: List[RMDProjectionRow] = []
    rate = annual_return_percent / 100
    horizon = min(years, RMD_MAX_AGE - start_age + 1)

    for offset in range(horizon):
        age = start_age + offset
        partner_age = spouse_age + offset if spouse_age is not None else None

        period: Optional[float] = None
        withdrawal = 0.0
        if age >= required_from_age:
            period, _ = distribution_period(age, has_spouse_beneficiary, partner_age)
            withdrawal = balance / period if balance > 0 else 0.0

        remaining = max(0.0, balance - withdrawal)
        earnings = remaining * rate
        ending = remaining + earnings
        rows.append(
            RMDProjectionRow(
                year=start_year + offset,
                age=age,
                beginning_balance=balance,
                distribution_period=period,
                rmd_amount=withdrawal,
                earnings=earnings,
                ending_balance=ending,
            )
        )
        balance = ending
        if balance <= 0:
            break

    return rows


def _validate(request: RMDRequest) -> None:
    errors: List[str] = []
    if request.birth_year < 1900:
        errors.append("Invalid birth year")
    if request.rmd_year < request.birth_year:
        errors.append("RMD year cannot be before the birth year")
    if request.account_balance < 0:
        errors.append("Account balance cannot be negative")
    if request.has_spouse_beneficiary and request.spouse_birth_year is not None:
        if request.spouse_birth_year < 1900 or request.spouse_birth_year > request.rmd_year:
            errors.append("Invalid spouse birth year")
    if request.estimated_return_rate is not None and not -50 <= request.estimated_return_rate <= 50:
        errors.append("Return rate should be between -50% and 50%")
    if request.years_to_project is not None and request.years_to_project < 0:
        errors.append("Years to project cannot be negative")
    raise_if_errors(errors)


def calculate_rmd(request: RMDRequest) -> RMDResponse:
    _validate(request)

    current_age = request.rmd_year - request.birth_year
    start_age = rmd_start_age(request.birth_year)
    start_year = request.birth_year + start_age
    spouse_age = (
        request.rmd_year - request.spouse_birth_year
        if request.has_spouse_beneficiary and request.spouse_birth_year is not None
        else None
    )

    required = current_age >= start_age
    period: Optional[float] = None
    table: TableName = "Uniform"
    amount = 0.0
    if required:
        period, table = distribution_period(current_age, request.has_spouse_beneficiary, spouse_age)
        amount = request.account_balance / period

    projections: List[RMDProjectionRow] = []
    total_rmds = final_balance = average_rmd = None
    if request.years_to_project:
        projections = project_rmds(
            request.account_balance,
            current_age,
            request.rmd_year,
            request.years_to_project,
            request.estimated_return_rate or 0.0,
            start_age,
            request.has_spouse_beneficiary,
            spouse_age,
        )
        if projections:
            total_rmds = sum(row.rmd_amount for row in projections)
            final_balance = projections[-1].ending_balance
            average_rmd = total_rmds / len(projections)
        logger.debug("rmd projection: %d years", len(projections))

    return RMDResponse(
        current_age=current_age,
        rmd_required=required,
        distribution_period=period,
        rmd_amount=amount,
        table_used=table,
        rmd_start_age=start_age,
        rmd_start_year=start_year,
        first_rmd_deadline=date(start_year + 1, 4, 1),
        rmd_deadline=rmd_deadline(request.birth_year, request.rmd_year),
        projections=projections,
        total_rmds=total_rmds,
        final_balance=final_balance,
        average_rmd=average_rmd,
    )


__all__ = [
    "rmd_start_age",
    "first_rmd_year",
    "is_rmd_required",
    "rmd_deadline",
    "joint_period",
    "distribution_period",
    "compute_rmd",
    "project_rmds",
    "calculate_rmd",
]
