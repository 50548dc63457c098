"""Data contracts for the average-return and VAT calculators."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ReturnPeriod(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    return_percent: float
    years: int = 0
    months: int = Field(0, description="Months on top of ``years``, 0-11.")

    @property
    def length_in_years(self) -> float:
        return self.years + self.months / 12


class AverageReturnRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    periods: List[ReturnPeriod] = Field(default_factory=list)


class AverageReturnResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    arithmetic_mean: float
    geometric_mean: float
    annualized_return: float
    cumulative_return: float
    total_periods: int
    total_years: float


class VATRequest(BaseModel):
    """Any two of the four quantities; the other two are derived."""

    model_config = ConfigDict(extra="forbid")

    vat_rate: Optional[float] = Field(None, description="Percent.")
    net_price: Optional[float] = None
    gross_price: Optional[float] = None
    tax_amount: Optional[float] = None


class VATResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    vat_rate: float
    net_price: float
    gross_price: float
    tax_amount: float
