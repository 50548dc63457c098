"""Data contracts for depreciation schedules."""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class DepreciationMethod(str, Enum):
    STRAIGHT_LINE = "straight-line"
    DECLINING_BALANCE = "declining-balance"
    DOUBLE_DECLINING_BALANCE = "double-declining-balance"
    SUM_OF_YEARS_DIGITS = "sum-of-years-digits"


class DepreciationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    asset_cost: float
    salvage_value: float = 0.0
    useful_life_years: int = Field(..., description="Useful life in whole years.")
    method: DepreciationMethod = DepreciationMethod.STRAIGHT_LINE


class YearlyDepreciation(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    annual_depreciation: float
    accumulated_depreciation: float
    book_value: float


class DepreciationResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    method: DepreciationMethod
    asset_cost: float
    salvage_value: float
    useful_life_years: int
    depreciable_base: float
    total_depreciation: float
    schedule: List[YearlyDepreciation]
