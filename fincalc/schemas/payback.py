"""Data contracts for payback-period analysis."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PeriodType(str, Enum):
    ANNUAL = "annual"
    MONTHLY = "monthly"


class CashFlow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    period: int
    amount: float
    label: Optional[str] = None


class PaybackRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    initial_investment: float
    cash_flows: List[CashFlow]
    discount_rate: float = Field(0.0, description="Percent per period, 0-100.")
    period_type: PeriodType = PeriodType.ANNUAL


class CashFlowRow(BaseModel):
    """A cash flow with its running totals net of the initial investment."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    period: int
    amount: float
    label: Optional[str] = None
    cumulative_cash_flow: float
    discounted_value: float
    discounted_cumulative_cash_flow: float


class PaybackResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    simple_payback_period: Optional[float]
    simple_payback_years: Optional[int]
    simple_payback_months: Optional[int]
    pays_back: bool

    discounted_payback_period: Optional[float]
    discounted_payback_years: Optional[int]
    discounted_payback_months: Optional[int]
    discounted_pays_back: bool

    total_cash_inflows: float
    profit_after_payback: float
    roi: float
    npv: float

    cash_flow_schedule: List[CashFlowRow]

    period_type: PeriodType
    discount_rate: float
    initial_investment: float
