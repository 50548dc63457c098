"""Data contracts for the loan calculators (APR, amortization, interest rate)."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class LoanTerms(BaseModel):
    """Inputs of the APR calculation."""

    model_config = ConfigDict(extra="forbid")

    principal: float = Field(..., description="Amount borrowed before any fees.")
    nominal_annual_rate_percent: float = Field(..., description="Stated annual interest rate, e.g. 6 for 6%.")
    term_months: int = Field(..., description="Number of monthly payments.")
    loaned_fees: float = Field(0.0, description="Fees rolled into the financed amount.")
    upfront_fees: float = Field(0.0, description="Fees paid out of the loan proceeds.")

    @property
    def amount_financed(self) -> float:
        return self.principal + self.loaned_fees

    @property
    def net_received(self) -> float:
        return self.principal - self.upfront_fees

    @property
    def total_fees(self) -> float:
        return self.loaned_fees + self.upfront_fees


class AprResponse(BaseModel):
    """True cost of a loan once fees are taken into account."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    nominal_rate: float
    effective_apr: float
    monthly_payment: float
    total_payments: float
    total_interest: float
    total_fees: float
    amount_financed: float
    net_amount_received: float
    total_cost: float
    converged: bool = True
    iterations: int = 0


class AmortizationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    principal: float
    annual_rate_percent: float
    term_months: int


class AmortizationRow(BaseModel):
    """Single month of a fixed-payment schedule, rounded to cents for display."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    period: int = Field(..., ge=1)
    payment: float
    principal_portion: float
    interest_portion: float
    ending_balance: float = Field(..., ge=0)


class AmortizationResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_payment: float
    total_payments: float
    total_interest: float
    schedule: List[AmortizationRow]


class InterestRateRequest(BaseModel):
    """Loan whose rate is unknown: amount, term and the payment being charged."""

    model_config = ConfigDict(extra="forbid")

    principal: float
    term_months: int
    monthly_payment: float


class InterestRateResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    annual_interest_rate: float = Field(..., description="Nominal annual rate in percent.")
    monthly_rate: float = Field(..., description="Periodic rate as a decimal.")
    total_payment: float
    total_interest: float
    converged: bool = True
    iterations: int = 0
