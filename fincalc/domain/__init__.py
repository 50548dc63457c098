"""Domain constants and error types shared across calculators."""

from fincalc.domain.errors import (
    CalculationError,
    ConvergenceError,
    InputValidationError,
    UnsupportedOptionError,
)

__all__ = [
    "CalculationError",
    "ConvergenceError",
    "InputValidationError",
    "UnsupportedOptionError",
]
