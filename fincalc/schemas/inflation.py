"""Data contracts for the inflation calculator."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class InflationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    initial_amount: float
    inflation_rate: float = Field(..., description="Annual inflation in percent.")
    years: int


class InflationYear(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    nominal_value: float
    real_value: float = Field(..., description="Purchasing power of the initial amount in today's money.")
    inflation_impact: float
    cumulative_inflation: float


class InflationResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    future_value: float = Field(..., description="Amount needed later to match today's purchasing power.")
    purchasing_power: float
    total_inflation: float
    real_value_loss: float
    year_by_year: List[InflationYear]
