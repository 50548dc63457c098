"""Data contracts for required minimum distribution calculations."""

from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TableName = Literal["Uniform", "Joint"]


class RMDRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    birth_year: int
    rmd_year: int
    account_balance: float = Field(..., description="Balance on December 31 of the prior year.")
    has_spouse_beneficiary: bool = False
    spouse_birth_year: Optional[int] = None
    estimated_return_rate: Optional[float] = Field(None, description="Annual return in percent for projections.")
    years_to_project: Optional[int] = None


class RMDProjectionRow(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    age: int
    beginning_balance: float
    distribution_period: Optional[float] = Field(None, description="Empty for years before RMDs begin.")
    rmd_amount: float
    earnings: float
    ending_balance: float


class RMDResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    current_age: int
    rmd_required: bool
    distribution_period: Optional[float]
    rmd_amount: float
    table_used: TableName
    rmd_start_age: int
    rmd_start_year: int
    first_rmd_deadline: date
    rmd_deadline: date
    projections: List[RMDProjectionRow] = Field(default_factory=list)
    total_rmds: Optional[float] = None
    final_balance: Optional[float] = None
    average_rmd: Optional[float] = None
