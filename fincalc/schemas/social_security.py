"""Data contracts for the Social Security claiming-age calculators."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from fincalc.config import DEFAULT_FULL_BENEFIT


class IdealAgeRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    birth_year: int
    life_expectancy: int
    investment_return: float = Field(..., description="Annual percent used to discount future benefits.")
    cola: float = Field(..., description="Annual cost-of-living adjustment in percent.")
    full_benefit: float = Field(DEFAULT_FULL_BENEFIT, description="Monthly benefit at full retirement age.")


class AgeAnalysis(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    age: int
    monthly_benefit: float
    annual_benefit: float
    lifetime_value: float
    present_value: float
    percent_of_fra: float


class IdealAgeResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    full_retirement_age: float
    ideal_claim_age: int
    monthly_benefit_at_ideal_age: float
    annual_benefit_at_ideal_age: float
    lifetime_value_at_ideal_age: float
    present_value_at_ideal_age: float
    age_analysis: List[AgeAnalysis]
    break_even_vs_early: Optional[float] = Field(None, description="Null when claiming later never catches up.")
    break_even_vs_late: Optional[float] = None
    recommendation: str


class CompareAgesRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    claim_age_1: int
    monthly_payment_1: float
    claim_age_2: int
    monthly_payment_2: float
    investment_return: float
    cola: float


class ClaimOption(BaseModel):
    """One claiming strategy evaluated at each planning horizon (age)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    claim_age: int
    monthly_benefit: float
    annual_benefit: float
    lifetime_values: Dict[int, float]
    present_values: Dict[int, float]


class CumulativeComparison(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    age: int
    years_from_start: int
    option_1_cumulative: float
    option_2_cumulative: float
    difference: float


class CompareAgesResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    option_1: ClaimOption
    option_2: ClaimOption
    break_even_age: Optional[float]
    better_option: Literal[1, 2]
    differences: Dict[int, float] = Field(..., description="Option 1 minus option 2 present value per horizon.")
    cumulative_comparison: List[CumulativeComparison]
    recommendation: str
