"""HTTP routes for the Flask API.

Every calculator endpoint does the same three things: validate the JSON body
into the calculator's request model, call the engine, and return the
response model as JSON. No arithmetic happens here.
"""

import logging
from http import HTTPStatus
from typing import Any, Callable, Dict, Type

from flask import Blueprint, jsonify, request
from pydantic import BaseModel, ValidationError

from fincalc import __version__
from fincalc.core.amortization import calculate_amortization, calculate_apr
from fincalc.core.average_return import calculate_average_return
from fincalc.core.depreciation import calculate_depreciation
from fincalc.core.inflation import calculate_inflation
from fincalc.core.interest_rate import calculate_interest_rate
from fincalc.core.payback import calculate_payback
from fincalc.core.rmd import calculate_rmd
from fincalc.core.savings import calculate_savings
from fincalc.core.social_security import compare_claim_ages, ideal_claim_age
from fincalc.core.vat import calculate_vat
from fincalc.domain.errors import CalculationError
from fincalc.schemas.depreciation import DepreciationRequest
from fincalc.schemas.health import PingResponse
from fincalc.schemas.inflation import InflationRequest
from fincalc.schemas.loans import AmortizationRequest, InterestRateRequest, LoanTerms
from fincalc.schemas.payback import PaybackRequest
from fincalc.schemas.returns import AverageReturnRequest, VATRequest
from fincalc.schemas.rmd import RMDRequest
from fincalc.schemas.savings import SavingsRequest
from fincalc.schemas.social_security import CompareAgesRequest, IdealAgeRequest

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected %s: %d schema errors", request.path, exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(CalculationError)
def _handle_calculation_error(exc: CalculationError):
    """Domain guards report every problem they found as a list of messages."""
    logger.info("rejected %s: %s", request.path, exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _strict() -> bool:
    return request.args.get("strict", "").lower() in {"1", "true", "yes"}


def _run(model: Type[BaseModel], engine: Callable[..., BaseModel], **options: Any) -> Any:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = model.model_validate(raw_payload)
    result = engine(payload, **options)
    return jsonify(result.model_dump(mode="json"))


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", version=__version__)
    return jsonify(response.model_dump())


@api_bp.post("/calc/apr")
def apr() -> Any:
    """Effective APR including loan fees."""
    return _run(LoanTerms, calculate_apr, strict=_strict())


@api_bp.post("/calc/amortization")
def amortization() -> Any:
    """Monthly payment and full amortization schedule."""
    return _run(AmortizationRequest, calculate_amortization)


@api_bp.post("/calc/interest-rate")
def interest_rate() -> Any:
    """Solve the interest rate from principal, term and payment."""
    return _run(InterestRateRequest, calculate_interest_rate, strict=_strict())


@api_bp.post("/calc/depreciation")
def depreciation() -> Any:
    """Depreciation schedule for the chosen method."""
    return _run(DepreciationRequest, calculate_depreciation)


@api_bp.post("/calc/inflation")
def inflation() -> Any:
    """Inflation-adjusted value and purchasing power."""
    return _run(InflationRequest, calculate_inflation)


@api_bp.post("/calc/savings")
def savings() -> Any:
    """Savings growth with contributions and tax on interest."""
    return _run(SavingsRequest, calculate_savings)


@api_bp.post("/calc/rmd")
def rmd() -> Any:
    """Required minimum distribution with optional projection."""
    return _run(RMDRequest, calculate_rmd)


@api_bp.post("/calc/payback")
def payback() -> Any:
    """Simple and discounted payback period."""
    return _run(PaybackRequest, calculate_payback)


@api_bp.post("/calc/social-security/ideal-age")
def social_security_ideal_age() -> Any:
    """Claim age with the highest lifetime present value."""
    return _run(IdealAgeRequest, ideal_claim_age)


@api_bp.post("/calc/social-security/compare")
def social_security_compare() -> Any:
    """Compare two Social Security claim ages."""
    return _run(CompareAgesRequest, compare_claim_ages)


@api_bp.post("/calc/average-return")
def average_return() -> Any:
    """Average returns over periods of different lengths."""
    return _run(AverageReturnRequest, calculate_average_return)


@api_bp.post("/calc/vat")
def vat() -> Any:
    """Derive the missing VAT figures from any two of them."""
    return _run(VATRequest, calculate_vat)
