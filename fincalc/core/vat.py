"""Reverse VAT solver.

Rate, net price, gross price and tax amount are tied by two identities::

    tax = net * rate / 100
    gross = net + tax

so any two of them fix the other two. When more than two are supplied the
first matching pair in the order below wins and the rest are recomputed:

1. rate + net
2. rate + gross
3. rate + tax
4. net + gross
5. net + tax
6. gross + tax
"""

from __future__ import annotations

import logging
from typing import List

from fincalc.domain.errors import InputValidationError, raise_if_errors
from fincalc.schemas.returns import VATRequest, VATResponse

logger = logging.getLogger(__name__)


def _validate(request: VATRequest) -> None:
    values = {
        "VAT rate": request.vat_rate,
        "Net price": request.net_price,
        "Gross price": request.gross_price,
        "Tax amount": request.tax_amount,
    }
    provided = [value for value in values.values() if value is not None]

    errors: List[str] = []
    if len(provided) < 2 or all(value == 0 for value in provided):
        errors.append("Please provide at least 2 values")
    for name, value in values.items():
        if value is not None and value < 0:
            errors.append(f"{name} cannot be negative")
    if request.net_price is not None and request.gross_price is not None and request.gross_price < request.net_price:
        errors.append("Gross price must be greater than or equal to net price")
    if request.tax_amount is not None and request.gross_price is not None and request.tax_amount > request.gross_price:
        errors.append("Tax amount cannot exceed gross price")
    raise_if_errors(errors)


def _require_positive(value: float, message: str) -> float:
    if value <= 0:
        raise InputValidationError(message)
    return value


def calculate_vat(request: VATRequest) -> VATResponse:
    _validate(request)
    rate, net, gross, tax = request.vat_rate, request.net_price, request.gross_price, request.tax_amount

    if rate is not None and net is not None:
        tax = net * rate / 100
        gross = net + tax
    elif rate is not None and gross is not None:
        net = gross / (1 + rate / 100)
        tax = gross - net
    elif rate is not None and tax is not None:
        net = tax / (_require_positive(rate, "VAT rate must be greater than zero to derive prices from tax") / 100)
        gross = net + tax
    elif net is not None and gross is not None:
        tax = gross - net
        rate = tax / _require_positive(net, "Net price must be greater than zero to derive the VAT rate") * 100
    elif net is not None and tax is not None:
        gross = net + tax
        rate = tax / _require_positive(net, "Net price must be greater than zero to derive the VAT rate") * 100
    else:
        net = gross - tax
        rate = tax / _require_positive(net, "Tax amount must be less than gross price") * 100

    logger.debug("vat: rate=%s net=%s gross=%s tax=%s", rate, net, gross, tax)
    return VATResponse(vat_rate=rate, net_price=net, gross_price=gross, tax_amount=tax)


__all__ = ["calculate_vat"]
