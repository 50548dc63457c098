"""Data contracts for the savings projection."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class CompoundFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUALLY = "semiannually"
    ANNUALLY = "annually"
    CONTINUOUS = "continuous"


class SavingsRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    initial_deposit: float = 0.0
    monthly_contribution: float = 0.0
    annual_contribution: float = Field(0.0, description="Added every December.")
    annual_rate_percent: float
    compound_frequency: CompoundFrequency = CompoundFrequency.MONTHLY
    years_to_grow: int
    tax_rate_percent: float = Field(0.0, description="Share of each month's interest paid as tax.")
    contribution_increase_rate_percent: float = Field(0.0, description="Yearly escalation of contributions.")


class MonthlySavingsRow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int
    deposit: float
    interest: float = Field(..., description="Interest credited after tax.")
    tax_paid: float
    ending_balance: float


class AnnualSavingsRow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    starting_balance: float
    deposits: float
    interest: float
    tax_paid: float
    ending_balance: float


class SavingsResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    final_balance: float
    initial_deposit: float
    total_contributions: float = Field(..., description="Recurring contributions, excluding the initial deposit.")
    total_interest: float
    total_tax_paid: float
    schedule: List[MonthlySavingsRow]
    annual_schedule: List[AnnualSavingsRow]
